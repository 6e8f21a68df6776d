"""
Engine Implementations.

This package registers the built-in engines into a model environment.

Available Engines
-----------------
- linear_reg: lm, glmnet
- logistic_reg: glm, glmnet
- rand_forest: ranger
- decision_tree: rpart

All engines are backed by scikit-learn. Extension packages register further
engines into ``get_default_environment()`` with the same calls.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from . import decision_tree, glmnet, linear_reg, logistic_reg, rand_forest

if TYPE_CHECKING:
    from ..environment import ModelEnvironment


def register_engines(env: 'ModelEnvironment') -> None:
    """Register every built-in model and engine into ``env``."""
    linear_reg.register(env)
    logistic_reg.register(env)
    rand_forest.register(env)
    decision_tree.register(env)
    # glmnet adds to linear_reg and logistic_reg, so it goes last
    glmnet.register(env)
