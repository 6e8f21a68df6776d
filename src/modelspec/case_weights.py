"""
Case weights.

Weights must be wrapped in one of these types before they are passed to
``fit()``; plain arrays are rejected so that the kind of weighting is always
explicit.

- ImportanceWeights: non-negative reals that change a row's influence
- FrequencyWeights: non-negative integers counting repeated rows
"""
from __future__ import annotations

from typing import Any

import numpy as np

from .errors import ValidationError


class CaseWeights:
    """Base class for a single numeric vector of case weights."""

    kind = 'case'

    def __init__(self, values: Any):
        arr = np.asarray(values)
        if arr.ndim != 1:
            raise ValidationError("Case weights should be a single numeric vector.")
        if not np.issubdtype(arr.dtype, np.number) or np.issubdtype(arr.dtype, np.bool_):
            raise ValidationError("Case weights should be numeric.")
        if np.any(np.isnan(arr.astype(float))):
            raise ValidationError("Case weights cannot contain missing values.")
        if np.any(arr < 0):
            raise ValidationError("Case weights should be non-negative.")
        self._values = arr

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"<{self.kind}_weights[{len(self)}]>"

    def to_numpy(self) -> np.ndarray:
        return self._values.astype(float)


class ImportanceWeights(CaseWeights):
    kind = 'importance'


class FrequencyWeights(CaseWeights):
    kind = 'frequency'

    def __init__(self, values: Any):
        super().__init__(values)
        if not np.all(np.equal(np.mod(self._values, 1), 0)):
            raise ValidationError("Frequency weights should be whole numbers.")
        self._values = self._values.astype(int)


def importance_weights(values: Any) -> ImportanceWeights:
    return ImportanceWeights(values)


def frequency_weights(values: Any) -> FrequencyWeights:
    return FrequencyWeights(values)


def is_case_weights(x: Any) -> bool:
    return isinstance(x, CaseWeights)
