"""Tests for modelspec.case_weights module."""
from __future__ import annotations

import numpy as np
import pytest


class TestCaseWeights:
    """Tests for importance and frequency weights."""

    def test_importance_weights(self):
        from modelspec.case_weights import importance_weights, is_case_weights

        weights = importance_weights([0.5, 1.0, 2.5])

        assert is_case_weights(weights)
        assert len(weights) == 3
        assert weights.to_numpy().dtype == float
        assert repr(weights) == '<importance_weights[3]>'

    def test_frequency_weights_whole_numbers(self):
        from modelspec.case_weights import frequency_weights

        weights = frequency_weights([1.0, 2.0, 3.0])

        np.testing.assert_array_equal(weights.to_numpy(), [1.0, 2.0, 3.0])

    def test_frequency_weights_reject_fractions(self):
        from modelspec.case_weights import frequency_weights
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match="whole numbers"):
            frequency_weights([1.5, 2.0])

    @pytest.mark.parametrize('values,match', [
        ([[1, 2], [3, 4]], "single numeric vector"),
        (['a', 'b'], "numeric"),
        ([True, False], "numeric"),
        ([1.0, np.nan], "missing"),
        ([1.0, -1.0], "non-negative"),
    ])
    def test_invalid_values(self, values, match):
        from modelspec.case_weights import importance_weights
        from modelspec.errors import ValidationError

        with pytest.raises(ValidationError, match=match):
            importance_weights(values)

    def test_plain_values_are_not_case_weights(self):
        from modelspec.case_weights import is_case_weights

        assert not is_case_weights(np.ones(3))
        assert not is_case_weights([1, 2])
