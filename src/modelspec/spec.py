"""
Model specifications.

A ``ModelSpec`` describes a model abstractly: its type, mode, main
arguments, engine and engine-specific arguments. Specs are values;
``set_engine()``, ``set_mode()`` and ``update()`` return new specs.

Usage
-----
    from modelspec.spec import new_model_spec, set_engine

    spec = new_model_spec(
        'linear_reg',
        args={'penalty': 0.01, 'mixture': None},
        eng_args=None,
        mode='regression',
        method=None,
        engine='glmnet',
    )
    spec = set_engine(spec, 'glmnet', path_values=[0.1, 0.01])
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Optional

from .args import ArgValue, as_arg
from .checks import check_final_param, update_dot_check
from .config import ALL_MODES, MODE_ALIASES
from .environment import FitMethod, ModelEnvironment
from .errors import ValidationError
from .registry import ModelRegistry
from .resolver import (
    check_spec_mode_engine_val,
    describe_missing,
    has_loaded_implementation,
)

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Task type of a model."""

    REGRESSION = 'regression'
    CLASSIFICATION = 'classification'
    CENSORED_REGRESSION = 'censored regression'
    UNKNOWN = 'unknown'

    @classmethod
    def parse(cls, value: Any) -> 'Mode':
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValidationError(f"`mode` should be a string, not {type(value).__name__}.")
        text = MODE_ALIASES.get(value.strip(), value.strip())
        try:
            return cls(text)
        except ValueError:
            raise ValidationError(
                f"`mode` should be one of: {', '.join(repr(m) for m in ALL_MODES)}."
            ) from None


@dataclass
class ModelSpec:
    """
    Abstract description of a model.

    Attributes
    ----------
    model_type : str
        Model type tag (e.g., 'linear_reg'); selects checks and translation
    args : dict[str, ArgValue or None]
        Main arguments; None means not supplied
    eng_args : dict[str, ArgValue]
        Engine-specific arguments
    mode : str
        One of 'regression', 'classification', 'censored regression', 'unknown'
    engine : str, optional
        Engine name
    method : FitMethod, optional
        Fit method, filled in once the spec is translated
    """

    model_type: str
    args: dict = field(default_factory=dict)
    eng_args: dict = field(default_factory=dict)
    mode: str = 'unknown'
    engine: Optional[str] = None
    method: Optional[FitMethod] = None

    def arg(self, name: str) -> Optional[ArgValue]:
        return self.args.get(name)

    def __repr__(self) -> str:
        main = ', '.join(f"{k}={v!r}" for k, v in self.args.items() if v is not None)
        eng = ', '.join(f"{k}={v!r}" for k, v in self.eng_args.items())
        return (
            f"ModelSpec({self.model_type}, mode={self.mode!r}, engine={self.engine!r}"
            + (f", args=[{main}]" if main else '')
            + (f", eng_args=[{eng}]" if eng else '')
            + ')'
        )


def _normalize_args(args: Optional[Mapping[str, Any]]) -> dict:
    return {name: as_arg(value) for name, value in (args or {}).items()}


def new_model_spec(
    model_type: str,
    args: Optional[Mapping[str, Any]],
    eng_args: Optional[Mapping[str, Any]],
    mode: Any,
    method: Optional[FitMethod],
    engine: Optional[str],
    check_missing_spec: bool = True,
    registry: Optional[ModelRegistry] = None,
    environment: Optional[ModelEnvironment] = None,
) -> ModelSpec:
    """
    Create a validated model specification.

    The mode and engine are checked against the registry and the environment.
    If no implementation is loaded for the combination, the missing
    implementation message is logged (a spec can still be built, for
    example before an extension package is loaded).

    Raises
    ------
    ValidationError
        If the mode is not valid for the model type
    ConfigurationError
        If the engine is not known for the model type
    """
    mode = Mode.parse(mode).value
    check_spec_mode_engine_val(model_type, engine, mode, registry, environment)

    if check_missing_spec and not has_loaded_implementation(
        model_type, engine, mode, registry, environment
    ):
        logger.info(describe_missing(model_type, engine, mode, registry, environment))

    return ModelSpec(
        model_type=model_type,
        args=_normalize_args(args),
        eng_args={k: v for k, v in _normalize_args(eng_args).items() if v is not None},
        mode=mode,
        engine=engine,
        method=method,
    )


def set_engine(
    spec: ModelSpec,
    engine: str,
    registry: Optional[ModelRegistry] = None,
    environment: Optional[ModelEnvironment] = None,
    **engine_args: Any,
) -> ModelSpec:
    """Return a copy of ``spec`` using ``engine`` with the given engine arguments."""
    if not isinstance(engine, str) or not engine:
        raise ValidationError("`engine` should be a single, non-empty character string.")

    return new_model_spec(
        spec.model_type,
        args=spec.args,
        eng_args=engine_args,
        mode=spec.mode,
        method=None,
        engine=engine,
        registry=registry,
        environment=environment,
    )


def set_mode(
    spec: ModelSpec,
    mode: Any,
    registry: Optional[ModelRegistry] = None,
    environment: Optional[ModelEnvironment] = None,
) -> ModelSpec:
    """Return a copy of ``spec`` with a new mode."""
    mode = Mode.parse(mode).value
    check_spec_mode_engine_val(spec.model_type, spec.engine, mode, registry, environment)
    return replace(spec, mode=mode, method=None)


def update_main_parameters(args: Mapping[str, Any], param: Optional[Mapping[str, Any]]) -> dict:
    """
    Merge final parameter values into the main arguments.

    Raises
    ------
    ValidationError
        If a parameter is not a main argument
    """
    if not param:
        return dict(args)
    if not args:
        return _normalize_args(param)

    extra_args = [name for name in param if name not in args]
    if extra_args:
        raise ValidationError(
            "At least one argument is not a main argument: "
            + ', '.join(f"`{name}`" for name in extra_args)
        )

    merged = dict(args)
    merged.update(_normalize_args(param))
    return merged


def update_engine_parameters(
    eng_args: Optional[Mapping[str, Any]],
    fresh: bool,
    **kwargs: Any,
) -> dict:
    """
    Merge new values into the engine arguments.

    Only engine arguments already present on the spec can be updated.
    """
    if not eng_args or (fresh and not kwargs):
        ret = {}
    else:
        ret = dict(eng_args)
        ret.update(_normalize_args(kwargs))

    extra = {k: v for k, v in kwargs.items() if k not in (eng_args or {})}
    update_dot_check(**extra)

    return ret


def update(
    spec: ModelSpec,
    parameters: Any = None,
    fresh: bool = False,
    registry: Optional[ModelRegistry] = None,
    environment: Optional[ModelEnvironment] = None,
    **kwargs: Any,
) -> ModelSpec:
    """
    Update main and engine arguments of a spec.

    Parameters
    ----------
    spec : ModelSpec
        Spec to update
    parameters : dict or single-row DataFrame, optional
        Final values of main arguments (e.g. the best row of a tuning grid)
    fresh : bool
        If True, replace all arguments; otherwise only overwrite the ones given
    **kwargs
        Main arguments by name, or engine arguments already on the spec

    Returns
    -------
    ModelSpec
        Updated copy
    """
    main_kwargs = {k: v for k, v in kwargs.items() if k in spec.args}
    eng_kwargs = {k: v for k, v in kwargs.items() if k not in spec.args}

    eng_args = update_engine_parameters(spec.eng_args, fresh, **eng_kwargs)
    parameters = check_final_param(parameters)

    args = {name: as_arg(main_kwargs.get(name)) for name in spec.args}
    args = update_main_parameters(args, parameters)

    if fresh:
        new_args = args
        new_eng_args = eng_args
    else:
        new_args = dict(spec.args)
        new_args.update({k: v for k, v in args.items() if v is not None})
        new_eng_args = dict(spec.eng_args)
        new_eng_args.update(eng_args)

    return new_model_spec(
        spec.model_type,
        args=new_args,
        eng_args=new_eng_args,
        mode=spec.mode,
        method=None,
        engine=spec.engine,
        registry=registry,
        environment=environment,
    )
