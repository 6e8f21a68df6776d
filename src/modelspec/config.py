#!/usr/bin/env python3
"""
Configuration constants for modelspec.

This module centralizes paths, recognized modes, engine defaults and logging
settings used by the registry, resolver and translator.

Usage
-----
    from modelspec.config import MODEL_INFO_FILE, KNOWN_MODES

    # Or import specific sections
    from modelspec.config import (
        # Paths
        MODEL_INFO_FILE,
        MODEL_SPECS_FILE,

        # Modes
        KNOWN_MODES,
        ALL_MODES,

        # Engines
        DEFAULT_ENGINES,
    )
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


# =============================================================================
# PATHS
# =============================================================================

PACKAGE_DIR = Path(__file__).resolve().parent

# Static table of (model, engine, mode, pkg) rows
DATA_DIR = PACKAGE_DIR / 'data'
MODEL_INFO_FILE = DATA_DIR / 'models.tsv'

# Column delimiter and expected columns of the model info table
MODEL_INFO_DELIMITER = '\t'
MODEL_INFO_COLUMNS = ('model', 'engine', 'mode', 'pkg')

# Default YAML file holding named model specifications
MODEL_SPECS_FILE = Path.cwd() / 'model_specs.yml'


# =============================================================================
# MODES
# =============================================================================

# Modes an engine can be registered for
KNOWN_MODES = ('regression', 'censored regression', 'classification')

# Modes a model specification may carry
ALL_MODES = KNOWN_MODES + ('unknown',)

# Alternative spellings accepted when parsing a mode
MODE_ALIASES = {
    'censored_regression': 'censored regression',
}


# =============================================================================
# ENGINES
# =============================================================================

# Engine used when a model constructor is called without one
DEFAULT_ENGINES = {
    'linear_reg': 'lm',
    'logistic_reg': 'glm',
    'rand_forest': 'ranger',
    'decision_tree': 'rpart',
}

# Engines whose fitted objects carry a penalty path
PENALTY_PATH_ENGINES = ('glmnet',)

# Names reserved for data when an engine is called through the data interface
PROTECTED_DATA_ARGS = ('x', 'y', 'weights')


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = 'WARNING'
LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'


# =============================================================================
# VALIDATION
# =============================================================================

def validate_config() -> bool:
    """
    Validate configuration settings.

    Returns
    -------
    bool
        True if all validations pass

    Raises
    ------
    ValueError
        If any configuration is invalid
    """
    errors = []

    if not MODEL_INFO_FILE.exists():
        errors.append(f"MODEL_INFO_FILE does not exist: {MODEL_INFO_FILE}")

    for model, engine in DEFAULT_ENGINES.items():
        if not engine:
            errors.append(f"DEFAULT_ENGINES['{model}'] must be a non-empty string")

    for alias, mode in MODE_ALIASES.items():
        if mode not in KNOWN_MODES:
            errors.append(f"MODE_ALIASES['{alias}'] points to an unknown mode: {mode}")

    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        errors.append(f"LOG_LEVEL is not a logging level: {LOG_LEVEL}")

    if errors:
        raise ValueError("Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors))

    return True


def setup_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the package logger (used by the CLI)."""
    logger = logging.getLogger('modelspec')
    logger.setLevel(level or LOG_LEVEL)
    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.NullHandler)
               for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)


def get_default_engine(model_type: str) -> Optional[str]:
    """Return the default engine for a model type, or None."""
    return DEFAULT_ENGINES.get(model_type)


# =============================================================================
# MODULE INITIALIZATION
# =============================================================================

if __name__ == '__main__':
    # Print configuration when run directly
    print("modelspec Configuration")
    print("=" * 50)
    print(f"MODEL_INFO_FILE:   {MODEL_INFO_FILE}")
    print(f"MODEL_SPECS_FILE:  {MODEL_SPECS_FILE}")
    print(f"KNOWN_MODES:       {', '.join(KNOWN_MODES)}")
    print()
    print("Validating configuration...")
    try:
        validate_config()
        print("Configuration valid.")
    except ValueError as e:
        print(f"Configuration invalid:\n{e}")
