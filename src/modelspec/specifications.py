"""
Named Model Specifications in YAML.

A specifications file maps names to model descriptions. Each entry names the
model function and optionally its mode, engine, main arguments and engine
arguments:

    lasso:
      model: linear_reg
      engine: glmnet
      args:
        penalty: 0.01
        mixture: 1
      engine_args:
        path_values: [0.1, 0.01, 0.001]

    forest_tuned:
      model: rand_forest
      mode: classification
      args:
        trees: 500
        mtry: tune()

The strings ``tune()``, ``tune(id)`` and ``missing_arg()`` are read as
placeholders.

Usage
-----
    from modelspec.specifications import load_specifications, get_model_spec

    # Load all specifications
    specs = load_specifications()

    # Build a ModelSpec from one entry
    spec = get_model_spec('lasso')

    # Validate an entry
    errors = validate_specification(specs['lasso'])
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from .args import parse_arg
from .config import ALL_MODES, MODE_ALIASES, MODEL_SPECS_FILE
from .errors import ValidationError
from .models import MODEL_FUNCTIONS
from .spec import ModelSpec, set_engine

logger = logging.getLogger(__name__)

SPEC_FIELDS = ('model', 'mode', 'engine', 'args', 'engine_args', 'description')


def load_specifications(path: Optional[Path] = None) -> dict[str, dict]:
    """
    Load specifications from a YAML file.

    Parameters
    ----------
    path : Path, optional
        Path to the specifications file. Defaults to MODEL_SPECS_FILE.

    Returns
    -------
    dict[str, dict]
        Dictionary of specification_name -> specification_dict

    Raises
    ------
    FileNotFoundError
        If the specifications file is not found
    yaml.YAMLError
        If YAML parsing fails
    """
    path = Path(path) if path is not None else MODEL_SPECS_FILE

    if not path.exists():
        raise FileNotFoundError(f"Specifications file not found: {path}")

    with open(path) as f:
        specs = yaml.safe_load(f)

    if specs is None:
        return {}
    if not isinstance(specs, dict):
        raise ValidationError(f"Specifications file must hold a mapping of names: {path}")

    logger.debug("Loaded %d specifications from %s", len(specs), path)
    return specs


def get_specification(name: str, path: Optional[Path] = None) -> dict:
    """
    Get a single specification by name.

    Raises
    ------
    KeyError
        If the specification is not found
    """
    specs = load_specifications(path)

    if name not in specs:
        available = ', '.join(sorted(specs.keys()))
        raise KeyError(
            f"Unknown specification: '{name}'. Available: {available}"
        )

    spec = dict(specs[name] or {})
    spec['name'] = name
    return spec


def validate_specification(spec: dict) -> list[str]:
    """
    Validate a specification dictionary.

    Parameters
    ----------
    spec : dict
        Specification to validate

    Returns
    -------
    list[str]
        List of validation error messages (empty if valid)
    """
    errors = []

    if 'model' not in spec:
        errors.append("Missing required field: 'model'")
    elif spec['model'] not in MODEL_FUNCTIONS:
        available = ', '.join(sorted(MODEL_FUNCTIONS))
        errors.append(f"Unknown model '{spec['model']}'. Available: {available}")

    if 'mode' in spec:
        mode = spec['mode']
        if not isinstance(mode, str) or MODE_ALIASES.get(mode, mode) not in ALL_MODES:
            errors.append(f"Field 'mode' must be one of: {', '.join(ALL_MODES)}")

    if 'engine' in spec:
        if not isinstance(spec['engine'], str) or not spec['engine']:
            errors.append("Field 'engine' must be a non-empty string")

    for field in ('args', 'engine_args'):
        if field in spec and spec[field] is not None:
            if not isinstance(spec[field], dict):
                errors.append(f"Field '{field}' must be a mapping")
            elif not all(isinstance(k, str) for k in spec[field]):
                errors.append(f"All keys in '{field}' must be strings")

    unknown = [k for k in spec if k not in SPEC_FIELDS and k != 'name']
    if unknown:
        errors.append(f"Unknown field(s): {', '.join(sorted(unknown))}")

    return errors


def list_specifications(path: Optional[Path] = None) -> list[str]:
    """List all available specification names."""
    specs = load_specifications(path)
    return sorted(specs.keys())


def create_specification(
    name: str,
    model: str,
    mode: Optional[str] = None,
    engine: Optional[str] = None,
    args: Optional[dict] = None,
    engine_args: Optional[dict] = None,
    description: Optional[str] = None,
) -> dict:
    """
    Create a specification dictionary programmatically.

    Parameters
    ----------
    name : str
        Specification name
    model : str
        Model function name (e.g., 'linear_reg')
    mode : str, optional
        Model mode
    engine : str, optional
        Engine name; the model's default engine when omitted
    args : dict, optional
        Main arguments
    engine_args : dict, optional
        Engine-specific arguments
    description : str, optional
        Human-readable description

    Returns
    -------
    dict
        Specification dictionary
    """
    spec: dict[str, Any] = {
        'name': name,
        'model': model,
        'args': args or {},
        'engine_args': engine_args or {},
    }
    if mode is not None:
        spec['mode'] = mode
    if engine is not None:
        spec['engine'] = engine
    if description:
        spec['description'] = description

    return spec


def build_model_spec(spec: dict) -> ModelSpec:
    """
    Build a ModelSpec from a specification dictionary.

    Raises
    ------
    ValidationError
        If the specification does not validate
    """
    errors = validate_specification(spec)
    if errors:
        name = spec.get('name', '<unnamed>')
        raise ValidationError(f"Invalid specification '{name}'.", details=errors)

    model_fn = MODEL_FUNCTIONS[spec['model']]
    args = {k: parse_arg(v) for k, v in (spec.get('args') or {}).items()}

    kwargs: dict[str, Any] = dict(args)
    if 'mode' in spec:
        kwargs['mode'] = spec['mode']
    if 'engine' in spec:
        kwargs['engine'] = spec['engine']
    model_spec = model_fn(**kwargs)

    engine_args = {k: parse_arg(v) for k, v in (spec.get('engine_args') or {}).items()}
    if engine_args:
        model_spec = set_engine(model_spec, model_spec.engine, **engine_args)

    return model_spec


def get_model_spec(name: str, path: Optional[Path] = None) -> ModelSpec:
    """Load a named specification and build its ModelSpec."""
    return build_model_spec(get_specification(name, path))
