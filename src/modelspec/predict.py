"""
Predictions from fitted models.

Predictions always come back as a DataFrame with one row per row of
``new_data``:

- numeric: ``.pred``
- class:   ``.pred_class`` (categorical with the training levels)
- prob:    ``.pred_{level}`` for every level

Engines fit along a penalty path (glmnet) take a ``penalty`` argument and
support ``multi_predict()``.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
import pandas as pd

from .args import evaluate_arg, is_tune
from .checks import check_glmnet_penalty_predict
from .config import PENALTY_PATH_ENGINES
from .environment import ModelEnvironment, get_default_environment
from .errors import ValidationError
from .fit import ModelFit, as_frame

logger = logging.getLogger(__name__)

DEFAULT_TYPES = {
    'regression': 'numeric',
    'classification': 'class',
}


def _default_type(object: ModelFit) -> str:
    try:
        return DEFAULT_TYPES[object.spec.mode]
    except KeyError:
        raise ValidationError(
            f"No default prediction type for mode `{object.spec.mode}`; pass `type`."
        ) from None


def _select_predictors(object: ModelFit, new_data: Any) -> pd.DataFrame:
    new_data = as_frame(new_data)
    missing = [col for col in object.predictors if col not in new_data.columns]
    if missing:
        raise ValidationError(
            "Columns used to fit the model are missing from `new_data`: "
            + ', '.join(f"`{col}`" for col in missing)
        )
    return new_data[object.predictors]


def _format(raw: Any, type: str, object: ModelFit) -> pd.DataFrame:
    if type == 'numeric':
        return pd.DataFrame({'.pred': np.asarray(raw, dtype=float).ravel()})
    if type == 'class':
        values = np.asarray(raw).ravel()
        return pd.DataFrame({'.pred_class': pd.Categorical(values, categories=object.lvl)})

    raw = np.asarray(raw, dtype=float)
    classes = list(getattr(object.fit, 'classes_', object.lvl))
    res = pd.DataFrame(raw, columns=[f".pred_{c}" for c in classes])
    if object.lvl:
        res = res[[f".pred_{lvl}" for lvl in object.lvl if f".pred_{lvl}" in res.columns]]
    return res


def _predict_raw(
    object: ModelFit,
    new_data: pd.DataFrame,
    type: str,
    environment: ModelEnvironment,
    penalty: Optional[float] = None,
) -> pd.DataFrame:
    spec = object.spec
    method = environment.get_pred(spec.model_type, spec.engine, spec.mode, type)
    if method is None:
        available = environment.pred_types(spec.model_type, spec.engine, spec.mode)
        raise ValidationError(
            f"No `{type}` prediction method is available for this model.",
            details=[f"Available types: {', '.join(available) or 'none'}"],
        )

    kwargs = dict(method.args)
    if penalty is not None:
        kwargs['penalty'] = penalty
    raw = getattr(object.fit, method.func)(new_data, **kwargs)
    return _format(raw, type, object)


def predict(
    object: ModelFit,
    new_data: Any,
    type: Optional[str] = None,
    penalty: Optional[float] = None,
    environment: Optional[ModelEnvironment] = None,
) -> pd.DataFrame:
    """
    Predict from a fitted model.

    Parameters
    ----------
    object : ModelFit
        Fitted model
    new_data : DataFrame or array-like
        Predictors, with the columns used to fit
    type : str, optional
        'numeric', 'class' or 'prob'; defaults from the mode
    penalty : float, optional
        Penalty to predict at, for engines fit along a penalty path.
        Defaults to the spec's penalty.

    Returns
    -------
    pd.DataFrame
    """
    if environment is None:
        environment = get_default_environment()

    type = type or _default_type(object)
    new_data = _select_predictors(object, new_data)

    if object.spec.engine in PENALTY_PATH_ENGINES:
        if penalty is None:
            pen_arg = object.spec.args.get('penalty')
            penalty = None if is_tune(pen_arg) else evaluate_arg(pen_arg)
        penalty = check_glmnet_penalty_predict(penalty, object, multi=False)
    elif penalty is not None:
        raise ValidationError(
            f"`penalty` is not used by the `{object.spec.engine}` engine."
        )

    return _predict_raw(object, new_data, type, environment, penalty)


def multi_predict(
    object: ModelFit,
    new_data: Any,
    type: Optional[str] = None,
    penalty: Any = None,
    environment: Optional[ModelEnvironment] = None,
) -> pd.DataFrame:
    """
    Predict at several penalty values at once.

    Returns
    -------
    pd.DataFrame
        Long format with columns ``.row``, ``penalty`` and the prediction
        column(s), ordered by row then penalty
    """
    if environment is None:
        environment = get_default_environment()

    if object.spec.engine not in PENALTY_PATH_ENGINES:
        raise ValidationError(
            f"`multi_predict()` is not available for the `{object.spec.engine}` engine."
        )

    type = type or _default_type(object)
    new_data = _select_predictors(object, new_data)
    penalties = check_glmnet_penalty_predict(penalty, object, multi=True)

    frames = []
    for pen in penalties:
        res = _predict_raw(object, new_data, type, environment, float(pen))
        res.insert(0, 'penalty', float(pen))
        res.insert(0, '.row', np.arange(len(new_data)))
        frames.append(res)

    out = pd.concat(frames, ignore_index=True)
    out = out.sort_values(['.row', 'penalty'], kind='stable').reset_index(drop=True)
    logger.debug("multi_predict at %d penalties for %d rows", len(penalties), len(new_data))
    return out
