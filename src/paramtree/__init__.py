"""
ParamTree - recursive parameter scopes for declarative request validation

ParamTree builds a tree describing the expected shape of request parameters,
compiles per-field validation and coercion rules, and decides per request
which of those rules must run.
"""

from importlib.metadata import version

from paramtree.core.types import JSON, Boolean
from paramtree.endpoint import Endpoint, EndpointConfig
from paramtree.scope import ParamsScope

__version__ = version("paramtree")

__all__ = [
    "__version__",
    "Boolean",
    "Endpoint",
    "EndpointConfig",
    "JSON",
    "ParamsScope",
]
