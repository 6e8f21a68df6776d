#!/usr/bin/env python3
"""
Shared pytest fixtures for the test suite.

This module provides common fixtures used across test modules including:
- Temporary directories
- Regression and classification DataFrames
- A fresh model environment and a small registry
"""
from __future__ import annotations

import sys
from pathlib import Path

# Add src directory to Python path for test imports
_project_root = Path(__file__).parent.parent
_src_path = _project_root / 'src'
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

import pytest
import pandas as pd
import numpy as np
import tempfile
import shutil


# ============================================================
# PATH FIXTURES
# ============================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that is cleaned up after tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================
# DATA FIXTURES
# ============================================================

@pytest.fixture
def regression_df() -> pd.DataFrame:
    """Numeric outcome with three predictors."""
    rng = np.random.default_rng(42)
    n = 60
    x1 = rng.normal(size=n)
    x2 = rng.normal(size=n)
    x3 = rng.normal(size=n)
    return pd.DataFrame({
        'x1': x1,
        'x2': x2,
        'x3': x3,
        'y': 1.5 * x1 - 2.0 * x2 + rng.normal(scale=0.1, size=n),
    })


@pytest.fixture
def classification_df() -> pd.DataFrame:
    """Two-level categorical outcome with two predictors."""
    rng = np.random.default_rng(7)
    n = 80
    x1 = rng.normal(size=n)
    x2 = rng.normal(size=n)
    label = np.where(x1 + 0.5 * x2 > 0, 'yes', 'no')
    return pd.DataFrame({
        'x1': x1,
        'x2': x2,
        'y': pd.Categorical(label, categories=['no', 'yes']),
    })


@pytest.fixture
def noisy_classification_df() -> pd.DataFrame:
    """Two-level outcome that overlaps, so an unpenalized fit converges."""
    rng = np.random.default_rng(11)
    n = 120
    x1 = rng.normal(size=n)
    x2 = rng.normal(size=n)
    eta = x1 + 0.5 * x2 + rng.logistic(size=n)
    label = np.where(eta > 0, 'yes', 'no')
    return pd.DataFrame({
        'x1': x1,
        'x2': x2,
        'y': pd.Categorical(label, categories=['no', 'yes']),
    })


# ============================================================
# REGISTRY / ENVIRONMENT FIXTURES
# ============================================================

@pytest.fixture
def small_registry():
    """Registry with one built-in row and one extension row."""
    from modelspec.registry import ModelRegistry, RegistryEntry

    return ModelRegistry([
        RegistryEntry('linear_reg', 'lm', 'regression'),
        RegistryEntry('proportional_hazards', 'glmnet', 'censored regression', 'censored'),
        RegistryEntry('proportional_hazards', 'survival', 'censored regression', 'censored'),
    ])


@pytest.fixture
def empty_environment():
    """A model environment with nothing registered."""
    from modelspec.environment import ModelEnvironment

    return ModelEnvironment()


@pytest.fixture
def default_environment():
    """A fresh environment with the built-in engines registered."""
    from modelspec.environment import ModelEnvironment
    from modelspec.engines import register_engines

    env = ModelEnvironment()
    register_engines(env)
    return env
