"""
Random forests: the ``ranger`` engine.

Backed by scikit-learn's RandomForestRegressor and RandomForestClassifier.

Argument Mapping
----------------
- mtry  -> max_features
- trees -> n_estimators
- min_n -> min_samples_split
"""
from __future__ import annotations

from ..environment import FitMethod, FunctionRef, ModelEnvironment, PredictMethod

MODEL = 'rand_forest'
ENGINE = 'ranger'

_ESTIMATORS = {
    'regression': 'RandomForestRegressor',
    'classification': 'RandomForestClassifier',
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
                func=FunctionRef('sklearn.ensemble', estimator),
                interface='estimator',
                defaults={'n_jobs': 1},
                allow_case_weights=True,
            ),
        )

    env.set_model_arg(MODEL, ENGINE, 'mtry', 'max_features')
    env.set_model_arg(MODEL, ENGINE, 'trees', 'n_estimators')
    env.set_model_arg(MODEL, ENGINE, 'min_n', 'min_samples_split')

    env.set_pred(MODEL, ENGINE, 'regression', 'numeric', PredictMethod('numeric', 'predict'))
    env.set_pred(MODEL, ENGINE, 'classification', 'class', PredictMethod('class', 'predict'))
    env.set_pred(MODEL, ENGINE, 'classification', 'prob', PredictMethod('prob', 'predict_proba'))
