"""Tests for modelspec.environment module."""
from __future__ import annotations

import pytest


class TestRegistration:
    """Tests for registering models and engines."""

    def test_new_model_starts_unknown(self, empty_environment):
        env = empty_environment
        env.set_new_model('my_model')

        assert env.has_model('my_model')
        assert env.modes('my_model') == ['unknown']
        assert env.engines('my_model') == []

    def test_duplicate_model_raises(self, empty_environment):
        from modelspec.errors import ConfigurationError

        empty_environment.set_new_model('my_model')
        with pytest.raises(ConfigurationError, match="already exists"):
            empty_environment.set_new_model('my_model')

    def test_engine_adds_mode(self, empty_environment):
        env = empty_environment
        env.set_new_model('my_model')
        env.set_model_engine('my_model', 'regression', 'fast')

        assert 'regression' in env.modes('my_model')
        assert env.engines('my_model') == [('fast', 'regression')]

    def test_bad_mode_raises(self, empty_environment):
        from modelspec.errors import ValidationError

        empty_environment.set_new_model('my_model')
        with pytest.raises(ValidationError):
            empty_environment.set_model_engine('my_model', 'clustering', 'fast')

    def test_engine_for_unregistered_model_raises(self, empty_environment):
        from modelspec.errors import ConfigurationError

        with pytest.raises(ConfigurationError):
            empty_environment.set_model_engine('nope', 'regression', 'fast')

    def test_arg_mapping_conflict_raises(self, empty_environment):
        from modelspec.errors import ConfigurationError

        env = empty_environment
        env.set_new_model('my_model')
        env.set_model_engine('my_model', 'regression', 'fast')
        env.set_model_arg('my_model', 'fast', 'penalty', 'alpha')
        env.set_model_arg('my_model', 'fast', 'penalty', 'alpha')

        with pytest.raises(ConfigurationError, match="already mapped"):
            env.set_model_arg('my_model', 'fast', 'penalty', 'lambda_')

    def test_fit_requires_registered_engine_and_mode(self, empty_environment):
        from modelspec.environment import FitMethod, FunctionRef
        from modelspec.errors import ConfigurationError

        env = empty_environment
        env.set_new_model('my_model')
        env.set_model_engine('my_model', 'regression', 'fast')

        with pytest.raises(ConfigurationError):
            env.set_fit(
                'my_model', 'fast', 'classification',
                FitMethod(FunctionRef('sklearn.linear_model', 'LinearRegression')),
            )

    def test_bad_pred_type_raises(self, empty_environment):
        from modelspec.environment import PredictMethod
        from modelspec.errors import ValidationError

        env = empty_environment
        env.set_new_model('my_model')
        env.set_model_engine('my_model', 'regression', 'fast')

        with pytest.raises(ValidationError):
            env.set_pred('my_model', 'fast', 'regression', 'raw', PredictMethod('raw', 'predict'))

    def test_dependencies(self, empty_environment):
        env = empty_environment
        env.set_new_model('my_model')
        env.set_model_engine('my_model', 'regression', 'fast')
        env.set_model_engine('my_model', 'classification', 'fast')
        env.set_dependency('my_model', 'fast', 'scikit-learn')

        assert env.get_dependencies('my_model', 'fast', 'regression') == ['scikit-learn']
        assert env.get_dependencies('my_model', 'fast', 'classification') == ['scikit-learn']


class TestFitMethod:
    """Tests for FitMethod and FunctionRef."""

    def test_bad_interface_raises(self):
        from modelspec.environment import FitMethod, FunctionRef
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="interface"):
            FitMethod(FunctionRef('sklearn.linear_model', 'LinearRegression'), interface='formula')

    def test_function_ref_resolves(self):
        from sklearn.linear_model import LinearRegression
        from modelspec.environment import FunctionRef

        ref = FunctionRef('sklearn.linear_model', 'LinearRegression')

        assert ref.resolve() is LinearRegression
        assert ref.qualified_name == 'sklearn.linear_model.LinearRegression'

    def test_function_ref_missing_module(self):
        from modelspec.environment import FunctionRef
        from modelspec.errors import ConfigurationError

        with pytest.raises(ConfigurationError, match="Could not import"):
            FunctionRef('no_such_module_here', 'fit').resolve()

    def test_function_ref_missing_attribute(self):
        from modelspec.environment import FunctionRef
        from modelspec.errors import ConfigurationError

        with pytest.raises(ConfigurationError, match="has no attribute"):
            FunctionRef('sklearn.linear_model', 'NoSuchModel').resolve()


class TestDefaultEnvironment:
    """Tests for the built-in engines."""

    def test_builtin_models(self, default_environment):
        assert default_environment.models() == [
            'decision_tree', 'linear_reg', 'logistic_reg', 'rand_forest',
        ]

    def test_linear_reg_engines(self, default_environment):
        assert default_environment.engines('linear_reg') == [
            ('glmnet', 'regression'), ('lm', 'regression'),
        ]

    def test_glmnet_arg_mapping(self, default_environment):
        args = default_environment.get_args('linear_reg', 'glmnet')

        assert args['penalty'].original == 'lambda_'
        assert args['penalty'].has_submodel is True
        assert args['mixture'].original == 'alpha'

    def test_glmnet_protects_data_args(self, default_environment):
        method = default_environment.get_fit('linear_reg', 'glmnet', 'regression')

        assert method.interface == 'data'
        assert method.protect == ('x', 'y', 'weights')
        assert method.defaults['family'] == 'gaussian'

    def test_pred_types(self, default_environment):
        assert sorted(default_environment.pred_types('rand_forest', 'ranger', 'classification')) == [
            'class', 'prob',
        ]
        assert default_environment.get_pred('linear_reg', 'lm', 'regression', 'prob') is None

    def test_get_default_environment_is_cached(self):
        from modelspec.environment import get_default_environment

        assert get_default_environment() is get_default_environment()
