"""
Model functions.

Each function creates a ``ModelSpec`` for one model type. Main arguments
default to None (not supplied); engine-specific arguments go through
``set_engine()``.

Usage
-----
    from modelspec.models import linear_reg, rand_forest

    spec = linear_reg(penalty=0.01, mixture=1, engine='glmnet')
    forest = rand_forest(mode='classification', trees=500)
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from .checks import check_empty_ellipse
from .config import get_default_engine
from .spec import ModelSpec, new_model_spec


def linear_reg(
    mode: str = 'regression',
    engine: Optional[str] = None,
    penalty: Any = None,
    mixture: Any = None,
    **kwargs: Any,
) -> ModelSpec:
    """Linear regression."""
    check_empty_ellipse(**kwargs)
    return new_model_spec(
        'linear_reg',
        args={'penalty': penalty, 'mixture': mixture},
        eng_args=None,
        mode=mode,
        method=None,
        engine=engine or get_default_engine('linear_reg'),
    )


def logistic_reg(
    mode: str = 'classification',
    engine: Optional[str] = None,
    penalty: Any = None,
    mixture: Any = None,
    **kwargs: Any,
) -> ModelSpec:
    """Logistic regression for binary outcomes."""
    check_empty_ellipse(**kwargs)
    return new_model_spec(
        'logistic_reg',
        args={'penalty': penalty, 'mixture': mixture},
        eng_args=None,
        mode=mode,
        method=None,
        engine=engine or get_default_engine('logistic_reg'),
    )


def rand_forest(
    mode: str = 'unknown',
    engine: Optional[str] = None,
    mtry: Any = None,
    trees: Any = None,
    min_n: Any = None,
    **kwargs: Any,
) -> ModelSpec:
    """Random forest."""
    check_empty_ellipse(**kwargs)
    return new_model_spec(
        'rand_forest',
        args={'mtry': mtry, 'trees': trees, 'min_n': min_n},
        eng_args=None,
        mode=mode,
        method=None,
        engine=engine or get_default_engine('rand_forest'),
    )


def decision_tree(
    mode: str = 'unknown',
    engine: Optional[str] = None,
    cost_complexity: Any = None,
    tree_depth: Any = None,
    min_n: Any = None,
    **kwargs: Any,
) -> ModelSpec:
    """Decision tree."""
    check_empty_ellipse(**kwargs)
    return new_model_spec(
        'decision_tree',
        args={'cost_complexity': cost_complexity, 'tree_depth': tree_depth, 'min_n': min_n},
        eng_args=None,
        mode=mode,
        method=None,
        engine=engine or get_default_engine('decision_tree'),
    )


MODEL_FUNCTIONS: dict[str, Callable[..., ModelSpec]] = {
    'linear_reg': linear_reg,
    'logistic_reg': logistic_reg,
    'rand_forest': rand_forest,
    'decision_tree': decision_tree,
}
