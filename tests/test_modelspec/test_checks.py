"""Tests for modelspec.checks module."""
from __future__ import annotations

from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest


def _fitted(lambdas):
    """Stand-in for a fitted glmnet model holding a penalty path."""
    return SimpleNamespace(fit=SimpleNamespace(lambda_=np.asarray(lambdas, dtype=float)))


class TestDotChecks:
    """Tests for extra-argument checks."""

    def test_check_empty_ellipse_passes(self):
        from modelspec.checks import check_empty_ellipse

        assert check_empty_ellipse() == {}

    def test_check_empty_ellipse_raises(self):
        from modelspec.checks import check_empty_ellipse
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="set_engine") as exc:
            check_empty_ellipse(importance=True, verbose=1)
        assert '`importance`' in str(exc.value)
        assert '`verbose`' in str(exc.value)

    def test_update_dot_check(self):
        from modelspec.checks import update_dot_check
        from modelspec.errors import ValidationError

        update_dot_check()
        with pytest.raises(ValidationError, match="`foo`"):
            update_dot_check(foo=1)


class TestCheckOutcome:
    """Tests for check_outcome()."""

    def test_regression_numeric_ok(self):
        from modelspec import linear_reg
        from modelspec.checks import check_outcome

        assert check_outcome(pd.Series([1.0, 2.0]), linear_reg()) is None

    def test_regression_rejects_categorical(self):
        from modelspec import linear_reg
        from modelspec.checks import check_outcome
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="numeric"):
            check_outcome(pd.Series(['a', 'b'], dtype='category'), linear_reg())

    def test_regression_rejects_bool(self):
        from modelspec import linear_reg
        from modelspec.checks import check_outcome
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError):
            check_outcome(pd.Series([True, False]), linear_reg())

    def test_regression_multi_column(self):
        from modelspec import linear_reg
        from modelspec.checks import check_outcome
        from modelspec.errors import ValidationError

        check_outcome(pd.DataFrame({'a': [1.0], 'b': [2]}), linear_reg())
        with pytest.raises(ValidationError):
            check_outcome(pd.DataFrame({'a': [1.0], 'b': ['x']}), linear_reg())

    def test_classification_requires_categorical(self):
        from modelspec import logistic_reg
        from modelspec.checks import check_outcome
        from modelspec.errors import ValidationError

        check_outcome(pd.Series(['a', 'b'], dtype='category'), logistic_reg())
        with pytest.raises(ValidationError, match="factor"):
            check_outcome(pd.Series(['a', 'b']), logistic_reg())

    def test_unknown_mode_not_checked(self):
        from modelspec import rand_forest
        from modelspec.checks import check_outcome

        assert check_outcome(pd.Series(['a', 'b']), rand_forest()) is None


class TestGlmnetPenaltyFit:
    """Tests for check_glmnet_penalty_fit()."""

    def test_single_penalty(self):
        from modelspec import linear_reg
        from modelspec.checks import check_glmnet_penalty_fit

        assert check_glmnet_penalty_fit(linear_reg(penalty=0.1, engine='glmnet')) is None

    def test_tune_counts_as_one(self):
        from modelspec import linear_reg, tune
        from modelspec.checks import check_glmnet_penalty_fit

        assert check_glmnet_penalty_fit(linear_reg(penalty=tune(), engine='glmnet')) is None

    @pytest.mark.parametrize('penalty,n', [
        ([0.1, 0.01], 2),
        (np.array([0.1, 0.01, 0.001]), 3),
        (None, 0),
    ])
    def test_wrong_count(self, penalty, n):
        from modelspec import linear_reg
        from modelspec.checks import check_glmnet_penalty_fit
        from modelspec.errors import ValidationError

        spec = linear_reg(penalty=penalty, engine='glmnet')
        with pytest.raises(ValidationError, match="must be a single number") as exc:
            check_glmnet_penalty_fit(spec)
        assert f"There are {n} values for `penalty`." in str(exc.value)
        assert 'multi_predict()' in str(exc.value)


class TestGlmnetPenaltyPredict:
    """Tests for check_glmnet_penalty_predict()."""

    def test_defaults_to_fitted_lambda(self):
        from modelspec.checks import check_glmnet_penalty_predict

        assert check_glmnet_penalty_predict(None, _fitted([0.1])) == 0.1

    def test_single_lambda_consistent(self):
        from modelspec.checks import check_glmnet_penalty_predict

        assert check_glmnet_penalty_predict(0.1, _fitted([0.1])) == 0.1

    def test_single_lambda_mismatch(self):
        from modelspec.checks import check_glmnet_penalty_predict
        from modelspec.errors import ConsistencyError

        with pytest.raises(ConsistencyError, match="single penalty value of 0.1"):
            check_glmnet_penalty_predict(0.05, _fitted([0.1]))

    def test_multiple_penalties_need_multi(self):
        from modelspec.checks import check_glmnet_penalty_predict
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="multi_predict"):
            check_glmnet_penalty_predict([0.1, 0.01], _fitted([0.1, 0.01]))

    def test_path_allows_any_single_value(self):
        """A path fit accepts penalties between its values; predictions interpolate."""
        from modelspec.checks import check_glmnet_penalty_predict

        assert check_glmnet_penalty_predict(0.05, _fitted([0.1, 0.01])) == 0.05

    def test_fit_is_required(self):
        from modelspec.checks import check_glmnet_penalty_predict

        with pytest.raises(TypeError):
            check_glmnet_penalty_predict(0.1)

    def test_multi_returns_array(self):
        from modelspec.checks import check_glmnet_penalty_predict

        res = check_glmnet_penalty_predict([0.1, 0.01], _fitted([0.1]), multi=True)

        np.testing.assert_array_equal(res, [0.1, 0.01])

    def test_multi_defaults_to_path(self):
        from modelspec.checks import check_glmnet_penalty_predict

        res = check_glmnet_penalty_predict(None, _fitted([0.1, 0.01]), multi=True)

        np.testing.assert_array_equal(res, [0.1, 0.01])


class TestCaseWeightChecks:
    """Tests for case weight checks."""

    def test_none_passes(self):
        from modelspec import linear_reg
        from modelspec.checks import check_case_weights

        assert check_case_weights(None, linear_reg()) is None

    def test_plain_array_rejected(self):
        from modelspec import linear_reg
        from modelspec.checks import check_case_weights
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="importance_weights"):
            check_case_weights(np.ones(3), linear_reg())

    def test_engine_without_weights(self, empty_environment):
        from modelspec import linear_reg, importance_weights
        from modelspec.checks import case_weights_allowed, check_case_weights
        from modelspec.environment import FitMethod, FunctionRef
        from modelspec.errors import ValidationError

        env = empty_environment
        env.set_new_model('linear_reg')
        env.set_model_engine('linear_reg', 'regression', 'lm')
        env.set_fit(
            'linear_reg', 'lm', 'regression',
            FitMethod(FunctionRef('sklearn.linear_model', 'LinearRegression')),
        )
        spec = linear_reg()

        assert case_weights_allowed(spec, env) is False
        with pytest.raises(ValidationError, match="not enabled"):
            check_case_weights(importance_weights([1, 2, 3]), spec, env)

    def test_builtin_engine_allows_weights(self):
        from modelspec import linear_reg, importance_weights
        from modelspec.checks import check_case_weights

        assert check_case_weights(importance_weights([1.0, 0.5]), linear_reg()) is None


class TestFinalParam:
    """Tests for check_final_param()."""

    def test_dict(self):
        from modelspec.checks import check_final_param

        assert check_final_param({'penalty': 0.1}) == {'penalty': 0.1}

    def test_single_row_frame(self):
        from modelspec.checks import check_final_param

        res = check_final_param(pd.DataFrame({'penalty': [0.1], 'mixture': [1.0]}))

        assert res == {'penalty': 0.1, 'mixture': 1.0}

    def test_multi_row_frame_raises(self):
        from modelspec.checks import check_final_param
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="single row"):
            check_final_param(pd.DataFrame({'penalty': [0.1, 0.2]}))

    def test_wrong_type_raises(self):
        from modelspec.checks import check_final_param
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError):
            check_final_param([0.1])

    def test_unnamed_value_raises(self):
        from modelspec.checks import check_final_param
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="name"):
            check_final_param({'': 0.1})


class TestArgChecks:
    """Tests for the per-model argument checks."""

    def test_negative_penalty(self):
        from modelspec import linear_reg
        from modelspec.checks import check_args
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match=">= 0"):
            check_args(linear_reg(penalty=-1, engine='glmnet'))

    def test_mixture_range(self):
        from modelspec import logistic_reg
        from modelspec.checks import check_args
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match=r"\[0,1\]"):
            check_args(logistic_reg(penalty=0.1, mixture=1.5, engine='glmnet'))

    def test_tune_skipped(self):
        from modelspec import rand_forest, tune
        from modelspec.checks import check_args

        spec = rand_forest(mtry=tune(), trees=10)

        assert check_args(spec) is spec

    def test_rand_forest_trees(self):
        from modelspec import rand_forest
        from modelspec.checks import check_args
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="`trees`"):
            check_args(rand_forest(trees=0))

    def test_decision_tree_cost(self):
        from modelspec import decision_tree
        from modelspec.checks import check_args
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="cost_complexity"):
            check_args(decision_tree(cost_complexity=-0.1))

    def test_registered_check(self):
        """A new model type can add its own argument check."""
        from modelspec.checks import _ARG_CHECKS, check_args, register_arg_check
        from modelspec.errors import ValidationError
        from modelspec.spec import ModelSpec

        @register_arg_check('toy_model')
        def _check_toy(spec):
            raise ValidationError("toy check ran")

        try:
            with pytest.raises(ValidationError, match="toy check ran"):
                check_args(ModelSpec('toy_model'))
        finally:
            _ARG_CHECKS.pop('toy_model', None)

    def test_model_without_check_passes(self):
        from modelspec.checks import check_args
        from modelspec.spec import ModelSpec

        spec = ModelSpec('no_checks_model')

        assert check_args(spec) is spec
