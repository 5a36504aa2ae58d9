"""
ParamTree exception classes.

This package provides all exception types used throughout ParamTree for
consistent error handling and reporting.
"""

from paramtree.exceptions.core import (
    IncompatibleOptionValuesError,
    InvalidAttributeNameError,
    InvalidValidatorOptionsError,
    MissingGroupTypeError,
    OptionDeclarationError,
    ParamTreeError,
    ScopeStateError,
    UnknownParameterError,
    UnknownValidatorError,
    UnsupportedGroupTypeError,
)

__all__ = [
    "ParamTreeError",
    "OptionDeclarationError",
    "MissingGroupTypeError",
    "UnsupportedGroupTypeError",
    "IncompatibleOptionValuesError",
    "UnknownValidatorError",
    "InvalidValidatorOptionsError",
    "UnknownParameterError",
    "ScopeStateError",
    "InvalidAttributeNameError",
]
