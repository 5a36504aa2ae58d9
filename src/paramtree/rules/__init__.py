"""
ParamTree rule compilation.

This package turns declaration options into documentation attributes and
ordered validator registrations.
"""

from paramtree.rules.compiler import PIPELINE, compile_rules
from paramtree.rules.models import (
    CompiledRules,
    DependencyCondition,
    DocumentationAttributes,
    ResolvedRules,
    RuleSet,
    SharedOptions,
    ValidatorRegistration,
    ValueConstraints,
)

__all__ = [
    "PIPELINE",
    "compile_rules",
    "CompiledRules",
    "DependencyCondition",
    "DocumentationAttributes",
    "ResolvedRules",
    "RuleSet",
    "SharedOptions",
    "ValidatorRegistration",
    "ValueConstraints",
]
