"""
Error types raised by modelspec.

All errors are raised synchronously with a human-readable message; nothing
is retried or recovered internally.

- ConfigurationError: unsupported (model, engine, mode) combination
- ValidationError: malformed caller input
- ConsistencyError: a requested value conflicts with a fitted object
"""
from __future__ import annotations

from typing import Iterable


class ModelSpecError(Exception):
    """Base class for all modelspec errors."""

    def __init__(self, message: str, details: Iterable[str] = ()):
        self.message = message
        self.details = list(details)
        super().__init__(self._format())

    def _format(self) -> str:
        if not self.details:
            return self.message
        return self.message + "\n" + "\n".join(f"  i {d}" for d in self.details)


class ConfigurationError(ModelSpecError):
    """No available implementation for a (model, engine, mode) combination."""


class ValidationError(ModelSpecError, ValueError):
    """Caller input is malformed (outcome type, penalty count, extras, weights)."""


class ConsistencyError(ModelSpecError):
    """A prediction-time parameter conflicts with a value baked into a fit."""
