"""
Fitting a model specification.

``fit_xy()`` validates a spec against the data, translates it and invokes
the engine. ``fit()`` is the same for a DataFrame with named outcome
column(s).

Usage
-----
    from modelspec import linear_reg, set_engine, fit

    spec = set_engine(linear_reg(penalty=0.01), 'glmnet')
    model = fit(spec, df, outcome='y')
    model.fit.lambda_
    # array([0.01])
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .args import Deferred, Literal, is_tune
from .case_weights import CaseWeights
from .checks import check_args, check_case_weights, check_outcome
from .environment import ModelEnvironment, get_default_environment
from .errors import ConfigurationError, ValidationError
from .registry import ModelRegistry
from .resolver import describe_missing, has_loaded_implementation
from .spec import ModelSpec
from .translate import TranslatedCall, translate

logger = logging.getLogger(__name__)


@dataclass
class ModelFit:
    """
    A fitted model.

    Attributes
    ----------
    spec : ModelSpec
        Spec that was fit, with deferred arguments resolved
    fit : Any
        Object returned by the engine
    lvl : list, optional
        Outcome levels for classification models
    elapsed : float
        Fit time in seconds
    predictors : list[str]
        Predictor column names, in fit order
    call : TranslatedCall, optional
        The engine call that produced ``fit``
    """

    spec: ModelSpec
    fit: Any
    lvl: Optional[list] = None
    elapsed: float = 0.0
    predictors: list = field(default_factory=list)
    call: Optional[TranslatedCall] = None

    def __repr__(self) -> str:
        return (
            f"ModelFit({self.spec.model_type}, engine={self.spec.engine!r}, "
            f"mode={self.spec.mode!r}, fit={self.fit!r})"
        )


def as_frame(x: Any) -> pd.DataFrame:
    if isinstance(x, pd.DataFrame):
        return x
    arr = np.asarray(x)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValidationError("Predictors should be a 2-dimensional table.")
    return pd.DataFrame(arr, columns=[f"x{i + 1}" for i in range(arr.shape[1])])


def _prepare_outcome(y: Any) -> Union[pd.Series, pd.DataFrame]:
    if isinstance(y, pd.DataFrame):
        return y.iloc[:, 0] if y.shape[1] == 1 else y
    return pd.Series(y) if not isinstance(y, pd.Series) else y


def resolve_deferred_args(spec: ModelSpec, context: dict) -> ModelSpec:
    """Evaluate data descriptors; ``tune()`` placeholders are left in place."""
    def resolve(values: dict) -> dict:
        out = {}
        for name, value in values.items():
            if isinstance(value, Deferred) and not is_tune(value):
                value = Literal(value.evaluate(context))
            out[name] = value
        return out

    return replace(spec, args=resolve(spec.args), eng_args=resolve(spec.eng_args))


def _execute(call: TranslatedCall, x: pd.DataFrame, y: Any, weights: Optional[np.ndarray]) -> Any:
    target = call.func.resolve()
    kwargs = dict(call.arguments)

    if call.interface == 'estimator':
        estimator = target(**kwargs)
        fit_kwargs = {}
        if weights is not None:
            fit_kwargs['sample_weight'] = weights
        return estimator.fit(x, y, **fit_kwargs)

    data = {'x': x, 'y': y, 'weights': weights}
    for name in call.protect:
        kwargs[name] = data.get(name)
    return target(**kwargs)


def fit_xy(
    spec: ModelSpec,
    x: Any,
    y: Any,
    case_weights: Optional[CaseWeights] = None,
    registry: Optional[ModelRegistry] = None,
    environment: Optional[ModelEnvironment] = None,
) -> ModelFit:
    """
    Fit a model specification to predictors and outcome.

    Parameters
    ----------
    spec : ModelSpec
        Spec with a mode and an engine
    x : DataFrame or array-like
        Predictors
    y : Series, DataFrame or array-like
        Outcome; numeric for regression, categorical for classification
    case_weights : CaseWeights, optional
        Importance or frequency weights

    Returns
    -------
    ModelFit

    Raises
    ------
    ValidationError
        If the spec or the data fail a check
    ConfigurationError
        If no implementation is loaded for the spec
    """
    if environment is None:
        environment = get_default_environment()

    if spec.mode == 'unknown':
        raise ValidationError("Please set the mode in the model specification.")
    if spec.engine is None:
        raise ValidationError("Please set an engine with `set_engine()`.")
    if not has_loaded_implementation(spec.model_type, spec.engine, spec.mode, registry, environment):
        raise ConfigurationError(
            describe_missing(spec.model_type, spec.engine, spec.mode, registry, environment)
        )

    x = as_frame(x)
    check_case_weights(case_weights, spec, environment)
    check_outcome(y, spec)
    y = _prepare_outcome(y)

    if len(y) != len(x):
        raise ValidationError(
            f"The outcome has {len(y)} rows but the predictors have {len(x)}."
        )
    if case_weights is not None and len(case_weights) != len(x):
        raise ValidationError(
            f"There are {len(case_weights)} case weights for {len(x)} rows of data."
        )

    spec = resolve_deferred_args(spec, {'n_predictors': x.shape[1], 'n_obs': len(x)})
    check_args(spec)

    tuned = [name for name, value in {**spec.args, **spec.eng_args}.items() if is_tune(value)]
    if tuned:
        raise ValidationError(
            "Arguments marked with `tune()` cannot be used to fit: "
            + ', '.join(f"`{name}`" for name in tuned),
            details=["Use `update()` to set final values first."],
        )

    call = translate(spec, environment)
    spec = replace(spec, method=environment.get_fit(spec.model_type, spec.engine, spec.mode))

    lvl = None
    if spec.mode == 'classification' and isinstance(y, pd.Series):
        lvl = list(y.cat.categories)

    weights = case_weights.to_numpy() if case_weights is not None else None

    start_time = time.time()
    engine_fit = _execute(call, x, y, weights)
    elapsed = time.time() - start_time
    logger.debug("Fit %s with %s in %.3fs", spec.model_type, spec.engine, elapsed)

    return ModelFit(
        spec=spec,
        fit=engine_fit,
        lvl=lvl,
        elapsed=elapsed,
        predictors=list(x.columns),
        call=call,
    )


def fit(
    spec: ModelSpec,
    data: pd.DataFrame,
    outcome: Union[str, Sequence[str]],
    case_weights: Optional[CaseWeights] = None,
    registry: Optional[ModelRegistry] = None,
    environment: Optional[ModelEnvironment] = None,
) -> ModelFit:
    """
    Fit a model specification to a DataFrame.

    ``outcome`` names the outcome column(s); every other column is a
    predictor.
    """
    outcomes = [outcome] if isinstance(outcome, str) else list(outcome)
    missing = [col for col in outcomes if col not in data.columns]
    if missing:
        raise ValidationError(
            "Outcome column(s) not found in data: "
            + ', '.join(f"`{col}`" for col in missing)
        )

    y = data[outcomes[0]] if len(outcomes) == 1 else data[outcomes]
    x = data.drop(columns=outcomes)
    return fit_xy(spec, x, y, case_weights=case_weights, registry=registry, environment=environment)
