"""
Availability Resolver.

Decides whether a working implementation of a (model, engine, mode)
combination is loaded, and builds the message shown when it is not.

Usage
-----
    from modelspec.resolver import has_loaded_implementation, describe_missing

    has_loaded_implementation('linear_reg', 'glmnet', 'regression')
    # True

    has_loaded_implementation('proportional_hazards', 'glmnet', 'censored regression')
    # False

    print(describe_missing('proportional_hazards', 'glmnet', 'censored regression'))
"""
from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from .config import KNOWN_MODES
from .environment import ModelEnvironment, get_default_environment
from .errors import ConfigurationError, ValidationError
from .registry import ModelRegistry, get_model_registry

logger = logging.getLogger(__name__)


def _context(
    registry: Optional[ModelRegistry],
    environment: Optional[ModelEnvironment],
) -> tuple[ModelRegistry, ModelEnvironment]:
    return (
        registry if registry is not None else get_model_registry(),
        environment if environment is not None else get_default_environment(),
    )


def has_loaded_implementation(
    model_type: str,
    engine: Optional[str],
    mode: Optional[str],
    registry: Optional[ModelRegistry] = None,
    environment: Optional[ModelEnvironment] = None,
) -> bool:
    """
    Check whether a model is usable right now.

    True if the model is supported without extensions, or if it needs an
    extension and that extension has registered itself. False if it needs
    an extension that is not loaded.

    An unrecognized ``mode`` (including 'unknown') is a permissive fallback:
    every known mode is searched. ``engine=None`` matches any engine.

    Parameters
    ----------
    model_type : str
        Model type (e.g., 'linear_reg')
    engine : str or None
        Engine name
    mode : str or None
        Model mode

    Returns
    -------
    bool
    """
    registry, environment = _context(registry, environment)

    if mode in KNOWN_MODES:
        modes = (mode,)
    else:
        logger.debug(
            "Mode %r is not a known mode; searching all modes for `%s`",
            mode, model_type,
        )
        modes = KNOWN_MODES

    avail = [
        (eng, md) for eng, md in environment.engines(model_type)
        if md in modes and (engine is None or eng == engine)
    ]
    pars = registry.filter(model=model_type, engine=engine, modes=modes, has_pkg=False)

    return len(pars) > 0 or len(avail) > 0


# Short alias used by callers that only need the boolean answer
resolve = has_loaded_implementation


def describe_missing(
    model_type: str,
    engine: Optional[str],
    mode: Optional[str],
    registry: Optional[ModelRegistry] = None,
    environment: Optional[ModelEnvironment] = None,
) -> str:
    """
    Build the message for a specification with no loaded implementation.

    If a registered extension package supports the combination and it has not
    been loaded, the message names the package and asks the user to install
    and load it. Pure formatting; nothing is modified.

    Returns
    -------
    str
        Multi-line message
    """
    registry, environment = _context(registry, environment)

    avail = [
        (eng, md) for eng, md in environment.engines(model_type)
        if md == mode and eng == engine
    ]
    extensions = registry.filter(model=model_type, engine=engine, modes=(mode,), has_pkg=True)

    mode_text = '' if mode in (None, 'unknown') else f"{mode} "
    lines = [
        f"Could not locate an implementation for `{model_type}` {mode_text}model "
        f"specifications using the `{engine}` engine."
    ]

    if not avail and extensions:
        lines.append(
            f"The extension package {extensions[0].pkg} implements support "
            f"for this specification."
        )
        lines.append("Please install (if needed) and load to continue.")

    return "\n".join(lines)


def check_spec_mode_engine_val(
    model_type: str,
    engine: Optional[str],
    mode: str,
    registry: Optional[ModelRegistry] = None,
    environment: Optional[ModelEnvironment] = None,
) -> None:
    """
    Validate a mode and engine against what is known for a model type.

    Raises
    ------
    ValidationError
        If the mode is not available for the model type
    ConfigurationError
        If the engine is unknown for the model type, or not available in
        the requested mode
    """
    registry, environment = _context(registry, environment)

    known_engines = {eng for eng, _ in environment.engines(model_type)}
    known_engines.update(registry.engines(model_type))
    if not environment.has_model(model_type) and not known_engines:
        raise ConfigurationError(f"Model type `{model_type}` is not known.")

    all_modes = set(environment.modes(model_type)) | {
        e.mode for e in registry.filter(model=model_type)
    }
    all_modes.add('unknown')
    if mode not in all_modes:
        raise ValidationError(
            f"`mode` should be one of: "
            f"{', '.join(repr(m) for m in sorted(all_modes))}."
        )

    if engine is None:
        return

    if engine not in known_engines:
        raise ConfigurationError(
            f"Engine `{engine}` is not supported for `{model_type}()`.",
            details=[f"See `show_engines('{model_type}')`."],
        )

    if mode in KNOWN_MODES:
        engine_modes = {md for eng, md in environment.engines(model_type) if eng == engine}
        engine_modes.update(e.mode for e in registry.filter(model=model_type, engine=engine))
        if mode not in engine_modes:
            raise ConfigurationError(
                f"Available modes for engine {engine} are: "
                f"{', '.join(repr(m) for m in sorted(engine_modes))}."
            )


def show_engines(
    model_type: str,
    environment: Optional[ModelEnvironment] = None,
) -> pd.DataFrame:
    """
    List the engines currently loaded for a model type.

    Returns
    -------
    pd.DataFrame
        Columns 'engine' and 'mode', one row per combination
    """
    if environment is None:
        environment = get_default_environment()

    if not environment.has_model(model_type):
        raise ConfigurationError(
            f"No results found for model function `{model_type}`."
        )
    return pd.DataFrame(environment.engines(model_type), columns=['engine', 'mode'])
