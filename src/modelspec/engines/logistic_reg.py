"""
Logistic regression: the ``glm`` engine.

Backed by ``sklearn.linear_model.LogisticRegression`` with the solver's
default regularization. Use the ``glmnet`` engine to control the penalty.
"""
from __future__ import annotations

from ..environment import FitMethod, FunctionRef, ModelEnvironment, PredictMethod

MODEL = 'logistic_reg'


def register(env: ModelEnvironment) -> None:
    env.set_new_model(MODEL)
    env.set_model_mode(MODEL, 'classification')

    env.set_model_engine(MODEL, 'classification', 'glm')
    env.set_dependency(MODEL, 'glm', 'scikit-learn', 'classification')
    env.set_fit(
        MODEL, 'glm', 'classification',
        FitMethod(
            func=FunctionRef('sklearn.linear_model', 'LogisticRegression'),
            interface='estimator',
            defaults={'max_iter': 1000},
            allow_case_weights=True,
        ),
    )
    env.set_pred(MODEL, 'glm', 'classification', 'class', PredictMethod('class', 'predict'))
    env.set_pred(MODEL, 'glm', 'classification', 'prob', PredictMethod('prob', 'predict_proba'))
