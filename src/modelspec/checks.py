"""
Validation helpers run before a spec is translated, fit or predicted.

Each check is a stateless guard: it returns quietly when the input is
acceptable and raises otherwise.

Usage
-----
    from modelspec.checks import check_outcome, check_glmnet_penalty_fit

    check_outcome(df['y'], spec)
    check_glmnet_penalty_fit(spec)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import numpy as np
import pandas as pd

from .args import evaluate_arg, is_tune
from .case_weights import is_case_weights
from .errors import ConsistencyError, ValidationError

if TYPE_CHECKING:
    from .environment import ModelEnvironment
    from .fit import ModelFit
    from .spec import ModelSpec


def _format_names(names) -> str:
    return ', '.join(f"`{n}`" for n in names)


def check_empty_ellipse(**kwargs: Any) -> dict:
    """Ensure no extra keyword arguments were passed to a model function."""
    if kwargs:
        raise ValidationError(
            "Please pass other arguments to the model function via `set_engine()`.",
            details=[f"Unsupported argument(s): {_format_names(kwargs)}"],
        )
    return kwargs


def update_dot_check(**kwargs: Any) -> None:
    if kwargs:
        raise ValidationError(
            f"Extra arguments will be ignored: {_format_names(kwargs)}"
        )


# ------------------------------------------------------------------------------


def _outcome_columns(y: Any) -> list[pd.Series]:
    if isinstance(y, pd.DataFrame):
        return [y[col] for col in y.columns]
    if isinstance(y, np.ndarray) and y.ndim == 2:
        return [pd.Series(y[:, i]) for i in range(y.shape[1])]
    return [pd.Series(y)]


def _is_numeric(col: pd.Series) -> bool:
    return pd.api.types.is_numeric_dtype(col) and not pd.api.types.is_bool_dtype(col)


def _is_factor(col: pd.Series) -> bool:
    return isinstance(col.dtype, pd.CategoricalDtype)


def check_outcome(y: Any, spec: 'ModelSpec') -> None:
    """
    Check the outcome type against the mode.

    Regression outcomes must be numeric and classification outcomes must be
    categorical. Other modes are not checked.
    """
    if spec.mode == 'unknown':
        return None

    columns = _outcome_columns(y)
    if spec.mode == 'regression':
        if not all(_is_numeric(col) for col in columns):
            raise ValidationError("For a regression model, the outcome should be numeric.")
    elif spec.mode == 'classification':
        if not all(_is_factor(col) for col in columns):
            raise ValidationError(
                "For a classification model, the outcome should be a factor "
                "(a pandas categorical)."
            )
    return None


# ------------------------------------------------------------------------------


def _n_values(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, str):
        return 1
    if isinstance(value, np.ndarray):
        return int(value.size)
    if isinstance(value, (list, tuple, pd.Series, pd.Index)):
        return len(value)
    return 1


def check_glmnet_penalty_fit(spec: 'ModelSpec') -> None:
    """
    Check that a glmnet spec holds a single penalty value.

    A ``tune()`` placeholder counts as a single value.
    """
    pen = spec.args.get('penalty')
    n = 1 if is_tune(pen) else _n_values(evaluate_arg(pen))

    if n != 1:
        raise ValidationError(
            "For the glmnet engine, `penalty` must be a single number (or a value of `tune()`).",
            details=[
                f"There are {n} values for `penalty`.",
                "To try multiple values for total regularization, use a tuning grid.",
                "To predict multiple penalties, use `multi_predict()`.",
            ],
        )


def check_glmnet_penalty_predict(
    penalty: Any,
    object: 'ModelFit',
    multi: bool = False,
) -> Any:
    """
    Check the penalty used for prediction.

    ``predict()`` needs a single value; ``multi_predict()`` allows several.
    A model fit with exactly one penalty can only predict at that penalty;
    a model fit along a path interpolates between its penalty values.
    Pass ``penalty=None`` to use the fitted penalty (or the whole path).

    Returns
    -------
    float or np.ndarray
        The penalty to predict with (an array when ``multi`` is True)
    """
    lambdas = np.atleast_1d(np.asarray(getattr(object.fit, 'lambda_', ()), dtype=float))
    if penalty is None:
        penalty = lambdas

    pen = np.atleast_1d(np.asarray(penalty, dtype=float))

    # predict() allows a single lambda
    if not multi and pen.size != 1:
        raise ValidationError(
            "`penalty` should be a single numeric value. `multi_predict()` "
            "can be used to get multiple predictions per row of data."
        )

    if lambdas.size == 1 and pen.size == 1 and pen[0] != lambdas[0]:
        raise ConsistencyError(
            f"The glmnet model was fit with a single penalty value of "
            f"{lambdas[0]:g}. Predicting with a value of {pen[0]:g} "
            f"will give incorrect results."
        )

    if multi:
        return pen
    return float(pen[0])


# ------------------------------------------------------------------------------


def case_weights_allowed(spec: 'ModelSpec', environment: Optional['ModelEnvironment'] = None) -> bool:
    if environment is None:
        from .environment import get_default_environment
        environment = get_default_environment()

    fit_method = environment.get_fit(spec.model_type, spec.engine, spec.mode)
    if fit_method is None:
        return False
    return fit_method.allow_case_weights


def check_case_weights(
    x: Any,
    spec: 'ModelSpec',
    environment: Optional['ModelEnvironment'] = None,
) -> None:
    if x is None:
        return None
    if not is_case_weights(x):
        raise ValidationError(
            "`case_weights` should be a single numeric vector created with "
            "`importance_weights()` or `frequency_weights()`."
        )
    if not case_weights_allowed(spec, environment):
        raise ValidationError(
            "Case weights are not enabled by the underlying model implementation."
        )
    return None


# ------------------------------------------------------------------------------


def check_final_param(x: Any) -> Optional[dict]:
    """
    Check a set of final parameter values.

    Accepts a dict or a single-row DataFrame; every value needs a name.
    """
    if x is None:
        return None
    if not isinstance(x, (dict, pd.DataFrame)):
        raise ValidationError("The parameter object should be a dict or DataFrame.")
    if isinstance(x, pd.DataFrame):
        if len(x) > 1:
            raise ValidationError("The parameter DataFrame should have a single row.")
        x = {col: x[col].iloc[0] for col in x.columns} if len(x) else {}
    if any(not isinstance(name, str) or name == '' for name in x):
        raise ValidationError("All values in `parameters` should have a name.")
    return dict(x)


# ------------------------------------------------------------------------------
# Model argument checks, dispatched on model type


def _numeric_values(arg: Any) -> Optional[np.ndarray]:
    if arg is None or is_tune(arg):
        return None
    value = evaluate_arg(arg)
    try:
        arr = np.atleast_1d(np.asarray(value, dtype=float))
    except (TypeError, ValueError):
        return None
    return arr


def _check_penalized(spec: 'ModelSpec') -> None:
    penalty = _numeric_values(spec.args.get('penalty'))
    if penalty is not None and np.any(penalty < 0):
        raise ValidationError("The amount of regularization should be >= 0.")

    mixture = _numeric_values(spec.args.get('mixture'))
    if mixture is not None and np.any((mixture < 0) | (mixture > 1)):
        raise ValidationError("The mixture proportion should be within [0,1].")


def _check_positive(spec: 'ModelSpec', names: tuple) -> None:
    for name in names:
        values = _numeric_values(spec.args.get(name))
        if values is not None and np.any(values < 1):
            raise ValidationError(f"`{name}` should be >= 1.")


def _check_rand_forest(spec: 'ModelSpec') -> None:
    _check_positive(spec, ('mtry', 'trees', 'min_n'))


def _check_decision_tree(spec: 'ModelSpec') -> None:
    _check_positive(spec, ('tree_depth', 'min_n'))
    cost = _numeric_values(spec.args.get('cost_complexity'))
    if cost is not None and np.any(cost < 0):
        raise ValidationError("`cost_complexity` should be >= 0.")


_ARG_CHECKS: dict[str, Callable[['ModelSpec'], None]] = {
    'linear_reg': _check_penalized,
    'logistic_reg': _check_penalized,
    'rand_forest': _check_rand_forest,
    'decision_tree': _check_decision_tree,
}


def register_arg_check(model_type: str):
    """Decorator registering the argument check for a model type."""
    def decorator(func):
        _ARG_CHECKS[model_type] = func
        return func
    return decorator


def check_args(spec: 'ModelSpec') -> 'ModelSpec':
    """Run the model type's argument check; model types without one pass."""
    check = _ARG_CHECKS.get(spec.model_type)
    if check is not None:
        check(spec)
    return spec
