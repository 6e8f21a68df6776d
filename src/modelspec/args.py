"""
Argument values for model specifications.

A main or engine argument holds one of three kinds of value:

- Literal(value): a concrete value supplied by the caller
- Placeholder: the missing argument (``MISSING``); passed through unresolved
- Deferred(expression): a value decided later, such as ``tune()``

Usage
-----
    from modelspec.args import Literal, MISSING, tune, as_arg

    penalty = as_arg(0.01)          # Literal(0.01)
    mixture = tune()                # Deferred(Tune(''))
    convert_arg(mixture)            # Tune('')
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union


@dataclass(frozen=True)
class Literal:
    """A concrete argument value."""

    value: Any

    def __repr__(self) -> str:
        return f"Literal({self.value!r})"


class Placeholder:
    """The missing argument. There is exactly one instance, ``MISSING``."""

    _instance: Optional['Placeholder'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'missing_arg()'

    def __reduce__(self):
        return (Placeholder, ())


MISSING = Placeholder()


@dataclass(frozen=True)
class Tune:
    """Marker for a parameter to be filled in by tuning."""

    id: str = ''

    def __repr__(self) -> str:
        return f"tune({self.id!r})" if self.id else 'tune()'


@dataclass(frozen=True)
class Deferred:
    """
    A deferred expression.

    ``expression`` is either a marker object (such as ``Tune``) or a callable
    taking a context mapping (for example the number of predictors) and
    returning the concrete value.
    """

    expression: Any

    def evaluate(self, context: Optional[Mapping[str, Any]] = None) -> Any:
        if callable(self.expression):
            return self.expression(dict(context or {}))
        return self.expression

    def __repr__(self) -> str:
        return f"Deferred({self.expression!r})"


ArgValue = Union[Literal, Placeholder, Deferred]


@dataclass(frozen=True)
class Descriptor:
    """A data descriptor resolved at fit time, such as the number of predictors."""

    key: str
    scale: float = 1.0

    def __call__(self, context: Mapping[str, Any]) -> int:
        return max(1, int(context[self.key] * self.scale))

    def __repr__(self) -> str:
        name = {'n_predictors': '.preds', 'n_obs': '.obs'}.get(self.key, self.key)
        return f"{name}()" if self.scale == 1.0 else f"{name}() * {self.scale:g}"


def tune(id: str = '') -> Deferred:
    """Mark a parameter for tuning."""
    return Deferred(Tune(id))


def n_preds(scale: float = 1.0) -> Deferred:
    """Number of predictor columns at fit time, optionally scaled."""
    return Deferred(Descriptor('n_predictors', scale))


def n_obs(scale: float = 1.0) -> Deferred:
    """Number of rows at fit time, optionally scaled."""
    return Deferred(Descriptor('n_obs', scale))


def as_arg(value: Any) -> Optional[ArgValue]:
    """Normalize a caller-supplied value. ``None`` means not supplied."""
    if value is None:
        return None
    if isinstance(value, (Literal, Placeholder, Deferred)):
        return value
    if isinstance(value, Tune):
        return Deferred(value)
    return Literal(value)


def is_missing_arg(x: Any) -> bool:
    return x is MISSING


def is_tune(x: Any) -> bool:
    """True for a ``tune()`` placeholder, wrapped or not."""
    if isinstance(x, Deferred):
        x = x.expression
    return isinstance(x, Tune)


def convert_arg(x: Any) -> Any:
    """Unwrap an argument for inclusion in a call."""
    if isinstance(x, Deferred):
        return x.expression
    if isinstance(x, Literal):
        return x.value
    return x


def evaluate_arg(x: Any, context: Optional[Mapping[str, Any]] = None) -> Any:
    """Resolve an argument to a value; deferred callables see ``context``."""
    if isinstance(x, Deferred):
        return x.evaluate(context)
    if isinstance(x, Literal):
        return x.value
    return x


def parse_arg(value: Any) -> Optional[ArgValue]:
    """
    Parse a value read from a text source such as YAML.

    The strings ``tune()`` and ``tune(name)`` become tune placeholders and
    ``missing_arg()`` becomes ``MISSING``.
    """
    if isinstance(value, str):
        text = value.strip()
        if text == 'missing_arg()':
            return MISSING
        if text.startswith('tune(') and text.endswith(')'):
            return tune(text[5:-1].strip().strip('\'"'))
    return as_arg(value)


def describe_arg(x: Any) -> str:
    """Short text form of an argument value, used in rendered calls."""
    value = convert_arg(x)
    if isinstance(value, (Tune, Placeholder, Descriptor)):
        return repr(value)
    if callable(value):
        return getattr(value, '__name__', repr(value)) + '(...)'
    return repr(value)
