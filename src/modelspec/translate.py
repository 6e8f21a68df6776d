"""
Call Translator.

Turns a validated ``ModelSpec`` into the exact engine call: the target
function, its namespace and an ordered argument list. Main arguments are
renamed for the engine; engine arguments are appended; method defaults
fill whatever is left.

Usage
-----
    from modelspec import linear_reg, set_engine
    from modelspec.translate import translate

    spec = set_engine(linear_reg(penalty=0.01), 'glmnet')
    call = translate(spec)
    call.render()
    # 'modelspec.engines.glmnet.elastic_net_path(x=missing_arg(), ...)'
"""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .args import MISSING, convert_arg, describe_arg
from .checks import check_glmnet_penalty_fit
from .environment import FunctionRef, ModelEnvironment, get_default_environment
from .errors import ConfigurationError, ValidationError
from .resolver import describe_missing
from .spec import ModelSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslatedCall:
    """
    A fully built engine call.

    Attributes
    ----------
    target_function : str
        Function or estimator class name
    target_namespace : str
        Module holding the target
    arguments : dict
        Ordered keyword arguments; protected data arguments hold MISSING
    interface : str
        'estimator' or 'data' (see FitMethod)
    protect : tuple of str
        Names bound to data at fit time
    """

    target_function: str
    target_namespace: str
    arguments: dict = field(default_factory=dict)
    interface: str = 'estimator'
    protect: tuple = ()

    @property
    def func(self) -> FunctionRef:
        return FunctionRef(self.target_namespace, self.target_function)

    def render(self) -> str:
        args = ', '.join(f"{k}={describe_arg(v)}" for k, v in self.arguments.items())
        return f"{self.target_namespace}.{self.target_function}({args})"


# ------------------------------------------------------------------------------
# Per-model translation steps, run after the generic translation


def _translate_penalized(spec: ModelSpec, arguments: dict) -> dict:
    if spec.engine == 'glmnet':
        check_glmnet_penalty_fit(spec)
        if 'path_values' in arguments:
            arguments['lambda_'] = arguments.pop('path_values')
    return arguments


_TRANSLATORS: dict[str, Callable[[ModelSpec, dict], dict]] = {
    'linear_reg': _translate_penalized,
    'logistic_reg': _translate_penalized,
}


def register_translator(model_type: str):
    """Decorator registering an extra translation step for a model type."""
    def decorator(func):
        _TRANSLATORS[model_type] = func
        return func
    return decorator


# ------------------------------------------------------------------------------


def translate(spec: ModelSpec, environment: Optional[ModelEnvironment] = None) -> TranslatedCall:
    """
    Build the engine call for a model specification.

    Parameters
    ----------
    spec : ModelSpec
        Spec with an engine and a known mode
    environment : ModelEnvironment, optional
        Loaded implementations; defaults to the process-wide environment

    Returns
    -------
    TranslatedCall

    Raises
    ------
    ValidationError
        If the spec has no engine or no mode, or an engine argument
        duplicates a main argument
    ConfigurationError
        If no fit method is registered for the combination
    """
    if environment is None:
        environment = get_default_environment()

    if spec.engine is None:
        raise ValidationError("Please set an engine with `set_engine()`.")
    if spec.mode == 'unknown':
        raise ValidationError(
            "Model code depends on the mode; please specify one.",
            details=[f"Available modes: {', '.join(environment.modes(spec.model_type))}"],
        )

    method = environment.get_fit(spec.model_type, spec.engine, spec.mode)
    if method is None:
        raise ConfigurationError(
            describe_missing(spec.model_type, spec.engine, spec.mode, environment=environment)
        )

    arg_key = environment.get_args(spec.model_type, spec.engine)

    main = {}
    for name, value in spec.args.items():
        if value is None:
            continue
        mapping = arg_key.get(name)
        if mapping is None:
            logger.debug("`%s` is not used by the `%s` engine", name, spec.engine)
            continue
        main[mapping.original] = convert_arg(value)

    eng = dict(spec.eng_args)
    removed = [name for name in eng if name in method.protect]
    if removed:
        warnings.warn(
            "The following arguments cannot be manually modified and were removed: "
            + ', '.join(removed),
            stacklevel=2,
        )
        for name in removed:
            del eng[name]

    duplicated = [name for name in eng if name in main]
    if duplicated:
        raise ValidationError(
            "Engine arguments duplicate main arguments: "
            + ', '.join(f"`{name}`" for name in duplicated),
            details=["Set these through the main arguments of the model function."],
        )

    arguments: dict[str, Any] = {name: MISSING for name in method.protect}
    arguments.update(main)
    arguments.update({name: convert_arg(value) for name, value in eng.items()})
    for name, value in method.defaults.items():
        arguments.setdefault(name, value)

    translator = _TRANSLATORS.get(spec.model_type)
    if translator is not None:
        arguments = translator(spec, arguments)

    call = TranslatedCall(
        target_function=method.func.fun,
        target_namespace=method.func.pkg,
        arguments=arguments,
        interface=method.interface,
        protect=tuple(method.protect),
    )
    logger.debug("Translated %s to %s", spec.model_type, call.render())
    return call
