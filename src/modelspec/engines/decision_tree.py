"""
Decision trees: the ``rpart`` engine.

Backed by scikit-learn's DecisionTreeRegressor and DecisionTreeClassifier.

Argument Mapping
----------------
- cost_complexity -> ccp_alpha
- tree_depth      -> max_depth
- min_n           -> min_samples_split
"""
from __future__ import annotations

from ..environment import FitMethod, FunctionRef, ModelEnvironment, PredictMethod

MODEL = 'decision_tree'
ENGINE = 'rpart'

_ESTIMATORS = {
    'regression': 'DecisionTreeRegressor',
    'classification': 'DecisionTreeClassifier',
}


def register(env: ModelEnvironment) -> None:
    env.set_new_model(MODEL)

    for mode, estimator in _ESTIMATORS.items():
        env.set_model_mode(MODEL, mode)
        env.set_model_engine(MODEL, mode, ENGINE)
        env.set_dependency(MODEL, ENGINE, 'scikit-learn', mode)
        env.set_fit(
            MODEL, ENGINE, mode,
            FitMethod(
                func=FunctionRef('sklearn.tree', estimator),
                interface='estimator',
                allow_case_weights=True,
            ),
        )

    env.set_model_arg(MODEL, ENGINE, 'cost_complexity', 'ccp_alpha')
    env.set_model_arg(MODEL, ENGINE, 'tree_depth', 'max_depth')
    env.set_model_arg(MODEL, ENGINE, 'min_n', 'min_samples_split')

    env.set_pred(MODEL, ENGINE, 'regression', 'numeric', PredictMethod('numeric', 'predict'))
    env.set_pred(MODEL, ENGINE, 'classification', 'class', PredictMethod('class', 'predict'))
    env.set_pred(MODEL, ENGINE, 'classification', 'prob', PredictMethod('prob', 'predict_proba'))
