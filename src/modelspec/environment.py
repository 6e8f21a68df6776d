"""
Model Environment: the currently loaded implementations.

Where the registry is a static table, the environment records what is
actually available in this process: which modes and engines each model type
supports, how main arguments are renamed for each engine, and which
functions fit and predict.

Engines register themselves into an environment; extension packages add to
the default one.

Usage
-----
    from modelspec.environment import get_default_environment

    env = get_default_environment()

    env.engines('linear_reg')
    # [('glmnet', 'regression'), ('lm', 'regression')]

    fit_method = env.get_fit('linear_reg', 'glmnet', 'regression')
    fit_method.func.qualified_name
    # 'modelspec.engines.glmnet.elastic_net_path'
"""
from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Mapping, Optional

from .config import KNOWN_MODES
from .errors import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

FIT_INTERFACES = ('estimator', 'data')
PREDICT_TYPES = ('numeric', 'class', 'prob')


@dataclass(frozen=True)
class FunctionRef:
    """A function named by its module (namespace) and attribute."""

    pkg: str
    fun: str

    @property
    def qualified_name(self) -> str:
        return f"{self.pkg}.{self.fun}"

    def resolve(self) -> Callable:
        """Import the module and return the named callable."""
        try:
            module = importlib.import_module(self.pkg)
        except ImportError as e:
            raise ConfigurationError(
                f"Could not import `{self.pkg}` to call `{self.fun}()`: {e}"
            ) from e
        try:
            return getattr(module, self.fun)
        except AttributeError as e:
            raise ConfigurationError(
                f"`{self.pkg}` has no attribute `{self.fun}`."
            ) from e


@dataclass(frozen=True)
class FitMethod:
    """
    How an engine is called to fit a model.

    Attributes
    ----------
    func : FunctionRef
        Target function or estimator class
    interface : str
        'estimator': call ``func(**args)`` then ``.fit(x, y)``.
        'data': call ``func(**args)`` with data bound to the protected names.
    protect : tuple of str
        Argument names reserved for data; users cannot set them
    defaults : mapping
        Arguments always passed unless already present
    allow_case_weights : bool
        Whether the engine accepts case weights
    """

    func: FunctionRef
    interface: str = 'estimator'
    protect: tuple = ()
    defaults: Mapping[str, Any] = field(default_factory=dict)
    allow_case_weights: bool = False

    def __post_init__(self):
        if self.interface not in FIT_INTERFACES:
            raise ValidationError(
                f"`interface` should be one of: {', '.join(FIT_INTERFACES)}"
            )


@dataclass(frozen=True)
class PredictMethod:
    """
    How a fitted engine object produces predictions.

    ``func`` is a method name on the fitted object; ``args`` are extra
    keyword arguments passed to it.
    """

    type: str
    func: str
    args: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ArgMapping:
    """Renaming of a main argument for one engine."""

    model: str
    engine: str
    name: str
    original: str
    has_submodel: bool = False


class ModelEnvironment:
    """Mutable set of loaded implementations, keyed by model type."""

    def __init__(self):
        self._modes: dict[str, list[str]] = {}
        self._engines: dict[str, list[tuple[str, str]]] = {}
        self._dependencies: dict[tuple[str, str, str], list[str]] = {}
        self._args: dict[tuple[str, str], dict[str, ArgMapping]] = {}
        self._fits: dict[tuple[str, str, str], FitMethod] = {}
        self._preds: dict[tuple[str, str, str, str], PredictMethod] = {}

    # ------------------------------------------------------------------
    # registration
    # ------------------------------------------------------------------

    def set_new_model(self, model: str) -> None:
        if model in self._modes:
            raise ConfigurationError(f"Model `{model}` already exists.")
        self._modes[model] = ['unknown']
        self._engines[model] = []

    def set_model_mode(self, model: str, mode: str) -> None:
        self._check_model(model)
        _check_mode(mode)
        if mode not in self._modes[model]:
            self._modes[model].append(mode)

    def set_model_engine(self, model: str, mode: str, engine: str) -> None:
        self._check_model(model)
        _check_mode(mode)
        self.set_model_mode(model, mode)
        row = (engine, mode)
        if row not in self._engines[model]:
            self._engines[model].append(row)

    def set_dependency(self, model: str, engine: str, pkg: str, mode: Optional[str] = None) -> None:
        """Record a package an engine needs, for one mode or all of them."""
        self._check_engine(model, engine)
        modes = [mode] if mode else [m for e, m in self._engines[model] if e == engine]
        for m in modes:
            deps = self._dependencies.setdefault((model, engine, m), [])
            if pkg not in deps:
                deps.append(pkg)

    def set_model_arg(
        self,
        model: str,
        engine: str,
        name: str,
        original: str,
        has_submodel: bool = False,
    ) -> None:
        self._check_engine(model, engine)
        args = self._args.setdefault((model, engine), {})
        existing = args.get(name)
        if existing is not None and existing.original != original:
            raise ConfigurationError(
                f"Argument `{name}` of `{model}` is already mapped to "
                f"`{existing.original}` for engine `{engine}`."
            )
        args[name] = ArgMapping(model, engine, name, original, has_submodel)

    def set_fit(self, model: str, engine: str, mode: str, value: FitMethod) -> None:
        self._check_engine(model, engine, mode)
        key = (model, engine, mode)
        current = self._fits.get(key)
        if current is not None and current != value:
            raise ConfigurationError(
                f"The combination of `{engine}` and mode `{mode}` already has "
                f"a fit component for `{model}`."
            )
        self._fits[key] = value

    def set_pred(
        self,
        model: str,
        engine: str,
        mode: str,
        type: str,
        value: PredictMethod,
    ) -> None:
        self._check_engine(model, engine, mode)
        if type not in PREDICT_TYPES:
            raise ValidationError(
                f"`type` should be one of: {', '.join(PREDICT_TYPES)}"
            )
        key = (model, engine, mode, type)
        current = self._preds.get(key)
        if current is not None and current != value:
            raise ConfigurationError(
                f"The combination of `{engine}`, mode `{mode}` and type "
                f"`{type}` already has a prediction component for `{model}`."
            )
        self._preds[key] = value

    # ------------------------------------------------------------------
    # lookup
    # ------------------------------------------------------------------

    def has_model(self, model: str) -> bool:
        return model in self._modes

    def models(self) -> list[str]:
        return sorted(self._modes)

    def modes(self, model: str) -> list[str]:
        return list(self._modes.get(model, []))

    def engines(self, model: str) -> list[tuple[str, str]]:
        """(engine, mode) rows registered for a model, sorted."""
        return sorted(self._engines.get(model, []))

    def get_dependencies(self, model: str, engine: str, mode: str) -> list[str]:
        return list(self._dependencies.get((model, engine, mode), []))

    def get_args(self, model: str, engine: str) -> dict[str, ArgMapping]:
        return dict(self._args.get((model, engine), {}))

    def get_fit(self, model: str, engine: str, mode: str) -> Optional[FitMethod]:
        return self._fits.get((model, engine, mode))

    def get_pred(self, model: str, engine: str, mode: str, type: str) -> Optional[PredictMethod]:
        return self._preds.get((model, engine, mode, type))

    def pred_types(self, model: str, engine: str, mode: str) -> list[str]:
        return [t for (m, e, md, t) in self._preds if (m, e, md) == (model, engine, mode)]

    # ------------------------------------------------------------------

    def _check_model(self, model: str) -> None:
        if model not in self._modes:
            raise ConfigurationError(f"Model `{model}` has not been registered.")

    def _check_engine(self, model: str, engine: str, mode: Optional[str] = None) -> None:
        self._check_model(model)
        rows = self._engines[model]
        if mode is None:
            ok = any(e == engine for e, _ in rows)
        else:
            ok = (engine, mode) in rows
        if not ok:
            target = f"engine `{engine}`" + (f" and mode `{mode}`" if mode else '')
            raise ConfigurationError(
                f"Model `{model}` has no registered {target}; "
                f"call `set_model_engine()` first."
            )


def _check_mode(mode: str) -> None:
    if mode not in KNOWN_MODES:
        raise ValidationError(
            f"`mode` should be one of: {', '.join(repr(m) for m in KNOWN_MODES)}"
        )


@lru_cache(maxsize=None)
def get_default_environment() -> ModelEnvironment:
    """Process-wide environment with the built-in engines registered."""
    from .engines import register_engines

    env = ModelEnvironment()
    register_engines(env)
    logger.debug("Default environment loaded with models: %s", ', '.join(env.models()))
    return env
