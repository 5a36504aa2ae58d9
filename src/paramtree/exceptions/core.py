"""
Exception classes for ParamTree parameter declarations.

This module defines specific exception types for the configuration errors
that can occur while a parameter schema is being declared and compiled.
None of them are raised while validating a request.
"""

from typing import Any


class ParamTreeError(Exception):
    """Base exception for all ParamTree-related errors."""

    pass


class OptionDeclarationError(ParamTreeError, ValueError):
    """Raised when declaration options contradict each other."""

    def __init__(self, message: str):
        """
        Initialize the exception.

        Params:
            message: Description of the invalid option combination
        """
        super().__init__(message)


class MissingGroupTypeError(ParamTreeError):
    """Raised when a required parameter group declares no structural type."""

    def __init__(self, element: str | None = None):
        self.element = element
        target = f" for '{element}'" if element else ""
        super().__init__(f"group type is required{target}")


class UnsupportedGroupTypeError(ParamTreeError):
    """Raised when a parameter group declares a type that cannot hold fields."""

    def __init__(self, group_type: Any, element: str | None = None):
        self.group_type = group_type
        self.element = element
        target = f" for '{element}'" if element else ""
        super().__init__(
            f"group type{target} must be dict, list, JSON or list[JSON], got {group_type!r}"
        )


class IncompatibleOptionValuesError(ParamTreeError):
    """Raised when two options of one declaration cannot both hold."""

    def __init__(self, option1: str, value1: Any, option2: str, value2: Any):
        """
        Initialize the exception.

        Params:
            option1: Name of the first conflicting option (e.g. "default")
            value1: Value supplied for the first option
            option2: Name of the second conflicting option (e.g. "values")
            value2: Value supplied for the second option
        """
        self.option1 = option1
        self.value1 = value1
        self.option2 = option2
        self.value2 = value2
        super().__init__(
            f"{option1}: {value1!r} is incompatible with {option2}: {value2!r}"
        )

    @property
    def options(self) -> tuple[str, Any, str, Any]:
        """The conflicting option pair and their values."""
        return (self.option1, self.value1, self.option2, self.value2)


class UnknownValidatorError(ParamTreeError):
    """Raised when a declaration names a validator kind nobody registered."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = available or []
        message = f"unknown validator: {name}"
        if self.available:
            message += f". Available: {self.available}"
        super().__init__(message)


class InvalidValidatorOptionsError(ParamTreeError):
    """Raised when options do not fit the options schema of a validator kind."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid options for validator '{name}': {reason}")


class UnknownParameterError(ParamTreeError):
    """Raised when a dependency refers to a parameter that was never declared."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown parameter: {name}")


class ScopeStateError(ParamTreeError):
    """Raised when construction-only scope state is read after construction."""

    def __init__(self, scope_name: str, attribute: str):
        self.scope_name = scope_name
        self.attribute = attribute
        super().__init__(
            f"'{attribute}' of scope {scope_name} is consumed once the scope is built"
        )


class InvalidAttributeNameError(ParamTreeError):
    """Raised when a declared attribute name is empty or not a string."""

    def __init__(self, name: Any, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid attribute name {name!r}: {reason}")
