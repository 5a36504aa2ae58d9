"""
Validator registry mapping kind names to validator classes.

A declaration option such as ``length={"max": 5}`` is resolved to its
validator class here; a name nobody registered is a declaration error.
"""

import logging

from inflection import underscore

from paramtree.exceptions import UnknownValidatorError
from paramtree.validators.base import Validator

logger = logging.getLogger(__name__)


def kind_name(validator_class: type[Validator]) -> str:
    """
    Derive the kind name of a validator class.

    Examples:
        PresenceValidator -> "presence"
        ExceptValuesValidator -> "except_values"
    """
    return underscore(validator_class.__name__.removesuffix("Validator"))


class ValidatorRegistry:
    """Registry of validator kinds.

    Responsibilities:
      - Map kind names to `Validator` subclasses.
      - Fail with `UnknownValidatorError` for unregistered kinds.
    """

    def __init__(self, validators: dict[str, type[Validator]] | None = None):
        self._validators = (validators or {}).copy()

    def register(
        self, validator_class: type[Validator], name: str | None = None
    ) -> type[Validator]:
        """Register a validator class; usable as a class decorator.

        Params:
            validator_class: Validator subclass to register.
            name: Kind name; defaults to the underscored class name without
                its ``Validator`` suffix.

        Returns:
            The registered class.
        """
        name = name or kind_name(validator_class)
        if not vars(validator_class).get("kind"):
            validator_class.kind = name
        self._validators[name] = validator_class
        logger.debug("Registered validator %s as %r", validator_class.__name__, name)
        return validator_class

    def require(self, name: str) -> type[Validator]:
        """Resolve a kind name.

        Raises:
            UnknownValidatorError: If the kind is not registered.
        """
        try:
            return self._validators[str(name)]
        except KeyError:
            raise UnknownValidatorError(str(name), self.names()) from None

    def names(self) -> list[str]:
        """List all registered kind names."""
        return list(self._validators.keys())

    def copy(self) -> "ValidatorRegistry":
        """Independent registry starting from the same kinds."""
        return ValidatorRegistry(self._validators)

    def __contains__(self, name: str) -> bool:
        return name in self._validators


default_registry = ValidatorRegistry()


def require_validator(name: str) -> type[Validator]:
    """Resolve a kind name against the default registry."""
    return default_registry.require(name)
