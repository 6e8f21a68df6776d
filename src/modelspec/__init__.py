"""
Model Specification Package.

Describes statistical models abstractly (type, mode, main arguments, engine)
and translates them into concrete engine calls.

Usage
-----
    from modelspec import linear_reg, set_engine, fit, predict

    # Build a spec
    spec = set_engine(linear_reg(penalty=0.01, mixture=1), 'glmnet')

    # Check availability
    has_loaded_implementation('linear_reg', 'glmnet', 'regression')
    # True

    # Fit and predict
    model = fit(spec, df, outcome='y')
    preds = predict(model, new_df)
"""
from __future__ import annotations

import logging

from .args import MISSING, n_obs, n_preds, tune
from .case_weights import frequency_weights, importance_weights
from .environment import get_default_environment
from .errors import ConfigurationError, ConsistencyError, ModelSpecError, ValidationError
from .fit import ModelFit, fit, fit_xy
from .models import decision_tree, linear_reg, logistic_reg, rand_forest
from .predict import multi_predict, predict
from .registry import get_model_registry
from .resolver import describe_missing, has_loaded_implementation, show_engines
from .spec import ModelSpec, new_model_spec, set_engine, set_mode, update
from .translate import translate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = '0.1.0'

__all__ = [
    # Model functions
    'linear_reg',
    'logistic_reg',
    'rand_forest',
    'decision_tree',
    # Specs
    'ModelSpec',
    'new_model_spec',
    'set_engine',
    'set_mode',
    'update',
    # Argument placeholders
    'MISSING',
    'tune',
    'n_preds',
    'n_obs',
    # Availability
    'has_loaded_implementation',
    'describe_missing',
    'show_engines',
    'get_model_registry',
    'get_default_environment',
    # Translation, fitting and prediction
    'translate',
    'fit',
    'fit_xy',
    'ModelFit',
    'predict',
    'multi_predict',
    # Case weights
    'importance_weights',
    'frequency_weights',
    # Errors
    'ModelSpecError',
    'ConfigurationError',
    'ValidationError',
    'ConsistencyError',
]
