"""
Linear regression: the ``lm`` engine.

Backed by ``sklearn.linear_model.LinearRegression``. The main arguments
``penalty`` and ``mixture`` have no counterpart in ordinary least squares
and are not passed on.
"""
from __future__ import annotations

from ..environment import FitMethod, FunctionRef, ModelEnvironment, PredictMethod

MODEL = 'linear_reg'


def register(env: ModelEnvironment) -> None:
    env.set_new_model(MODEL)
    env.set_model_mode(MODEL, 'regression')

    env.set_model_engine(MODEL, 'regression', 'lm')
    env.set_dependency(MODEL, 'lm', 'scikit-learn', 'regression')
    env.set_fit(
        MODEL, 'lm', 'regression',
        FitMethod(
            func=FunctionRef('sklearn.linear_model', 'LinearRegression'),
            interface='estimator',
            allow_case_weights=True,
        ),
    )
    env.set_pred(MODEL, 'lm', 'regression', 'numeric', PredictMethod('numeric', 'predict'))
