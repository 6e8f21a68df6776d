"""
Elastic-net models along a penalty path: the ``glmnet`` engine.

``elastic_net_path()`` fits one scikit-learn model per penalty value and
keeps them together. Predictions at a penalty between two fitted values
interpolate the linear predictor of the bracketing fits; a penalty outside
the path uses the nearest end. Arguments follow glmnet's naming: ``alpha``
is the mixing proportion (1 = lasso, 0 = ridge) and ``lambda_`` holds the
penalty path.

Argument Mapping
----------------
- penalty -> lambda_
- mixture -> alpha

The engine argument ``path_values`` replaces ``lambda_`` during translation,
which allows fitting a whole path and using ``multi_predict()``.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
from sklearn.linear_model import (
    ElasticNet,
    LinearRegression,
    LogisticRegression,
    SGDClassifier,
)

from ..config import PROTECTED_DATA_ARGS
from ..environment import FitMethod, FunctionRef, ModelEnvironment, PredictMethod
from ..errors import ValidationError

logger = logging.getLogger(__name__)

ENGINE = 'glmnet'

FAMILIES = ('gaussian', 'binomial')

# Seed for the stochastic binomial solver, so refits give the same path
RANDOM_STATE = 0


class ElasticNetPath:
    """A set of elastic-net fits, one per penalty value."""

    def __init__(self, estimators: list, lambda_: np.ndarray, family: str):
        self.estimators = list(estimators)
        self.lambda_ = np.asarray(lambda_, dtype=float)
        self.family = family

    def __repr__(self) -> str:
        return f"ElasticNetPath(family={self.family!r}, n_lambda={self.lambda_.size})"

    @property
    def classes_(self) -> np.ndarray:
        if self.family != 'binomial':
            raise AttributeError("Only binomial fits have classes.")
        return self.estimators[0].classes_

    def _bracket(self, penalty: Optional[float]) -> tuple[int, int, float]:
        """Indices of the fits around ``penalty`` and the weight of the second."""
        lam = self.lambda_
        if penalty is None:
            if lam.size != 1:
                raise ValidationError("`penalty` is required for a path with several values.")
            return 0, 0, 0.0

        pen = float(penalty)
        if pen >= lam[0]:
            return 0, 0, 0.0
        if pen <= lam[-1]:
            last = lam.size - 1
            return last, last, 0.0

        # lambda_ is sorted descending; hi is the first value at or below pen
        hi = int(np.argmax(lam <= pen))
        lo = hi - 1
        weight = (lam[lo] - pen) / (lam[lo] - lam[hi])
        return lo, hi, float(weight)

    def _link(self, est, x: Any) -> np.ndarray:
        if self.family == 'binomial':
            return est.decision_function(x)
        return est.predict(x)

    def linear_predictor(self, x: Any, penalty: Optional[float] = None) -> np.ndarray:
        lo, hi, weight = self._bracket(penalty)
        eta = self._link(self.estimators[lo], x)
        if weight > 0:
            eta = (1 - weight) * eta + weight * self._link(self.estimators[hi], x)
        return np.asarray(eta, dtype=float)

    def predict(self, x: Any, penalty: Optional[float] = None) -> np.ndarray:
        eta = self.linear_predictor(x, penalty)
        if self.family == 'binomial':
            return np.where(eta > 0, self.classes_[1], self.classes_[0])
        return eta

    def predict_proba(self, x: Any, penalty: Optional[float] = None) -> np.ndarray:
        if self.family != 'binomial':
            raise ValidationError("Class probabilities need a binomial fit.")
        prob = np.exp(-np.logaddexp(0.0, -self.linear_predictor(x, penalty)))
        return np.column_stack([1.0 - prob, prob])


def _accepted(estimator_cls, kwargs: dict) -> dict:
    params = estimator_cls().get_params()
    return {k: v for k, v in kwargs.items() if k in params}


def _estimator(family: str, lam: float, alpha: float, kwargs: dict):
    if lam == 0:
        # The penalized solvers reject or warn on a zero penalty
        if family == 'gaussian':
            return LinearRegression(**_accepted(LinearRegression, kwargs))
        est_kwargs = _accepted(LogisticRegression, kwargs)
        est_kwargs['C'] = np.inf
        return LogisticRegression(**est_kwargs)

    if family == 'gaussian':
        return ElasticNet(alpha=lam, l1_ratio=alpha, **kwargs)
    return SGDClassifier(
        loss='log_loss', penalty='elasticnet', alpha=lam, l1_ratio=alpha,
        **{'random_state': RANDOM_STATE, **kwargs}
    )


def elastic_net_path(
    x: Any,
    y: Any,
    weights: Optional[np.ndarray] = None,
    alpha: float = 1.0,
    lambda_: Any = 1.0,
    family: str = 'gaussian',
    **kwargs: Any,
) -> ElasticNetPath:
    """
    Fit elastic-net models for each value of the penalty path.

    Parameters
    ----------
    x : array-like
        Predictors
    y : array-like
        Outcome
    weights : np.ndarray, optional
        Case weights
    alpha : float
        Mixing proportion between L1 (1) and L2 (0)
    lambda_ : float or sequence of float
        Penalty value(s), fit from largest to smallest
    family : str
        'gaussian' for regression, 'binomial' for classification
    **kwargs
        Passed to the scikit-learn estimator. A zero penalty is fit without
        regularization (LinearRegression or LogisticRegression), which only
        receives the arguments it accepts. The binomial solver is seeded with
        RANDOM_STATE unless `random_state` is given.

    Returns
    -------
    ElasticNetPath
    """
    if family not in FAMILIES:
        raise ValidationError(f"`family` should be one of: {', '.join(FAMILIES)}")

    lambdas = np.sort(np.atleast_1d(np.asarray(lambda_, dtype=float)))[::-1]
    if lambdas.size == 0:
        raise ValidationError("`lambda_` needs at least one value.")
    if np.any(lambdas < 0):
        raise ValidationError("The amount of regularization should be >= 0.")

    estimators = []
    for lam in lambdas:
        est = _estimator(family, lam, alpha, kwargs)
        est.fit(x, y, sample_weight=weights)
        estimators.append(est)

    logger.debug("Fit %s elastic-net path with %d penalty values", family, lambdas.size)
    return ElasticNetPath(estimators, lambdas, family)


def register(env: ModelEnvironment) -> None:
    """Add the glmnet engine to linear_reg and logistic_reg."""
    func = FunctionRef(__name__, 'elastic_net_path')

    for model, mode, family in (
        ('linear_reg', 'regression', 'gaussian'),
        ('logistic_reg', 'classification', 'binomial'),
    ):
        env.set_model_engine(model, mode, ENGINE)
        env.set_dependency(model, ENGINE, 'scikit-learn', mode)
        env.set_model_arg(model, ENGINE, 'penalty', 'lambda_', has_submodel=True)
        env.set_model_arg(model, ENGINE, 'mixture', 'alpha')
        env.set_fit(
            model, ENGINE, mode,
            FitMethod(
                func=func,
                interface='data',
                protect=PROTECTED_DATA_ARGS,
                defaults={'family': family},
                allow_case_weights=True,
            ),
        )

    env.set_pred('linear_reg', ENGINE, 'regression', 'numeric', PredictMethod('numeric', 'predict'))
    env.set_pred('logistic_reg', ENGINE, 'classification', 'class', PredictMethod('class', 'predict'))
    env.set_pred('logistic_reg', ENGINE, 'classification', 'prob', PredictMethod('prob', 'predict_proba'))
