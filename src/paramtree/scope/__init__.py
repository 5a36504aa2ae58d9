"""
ParamTree scopes.

This package provides the parameter scope tree and the declaration DSL
used to build it.
"""

from paramtree.scope.dsl import ParametersDSL, deep_merge, normalize_options
from paramtree.scope.params_scope import ParamsScope

__all__ = [
    "ParamsScope",
    "ParametersDSL",
    "deep_merge",
    "normalize_options",
]
