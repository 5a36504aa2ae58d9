"""
Built-in validator kinds.

Each kind declares the options it accepts; the request-time checks are
provided by the request layer.
"""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from paramtree.validators.base import Validator, ValidatorOptions
from paramtree.validators.registry import default_registry


class PresenceOptions(ValidatorOptions):
    value: bool = True


class CoerceOptions(ValidatorOptions):
    type: Any
    method: Any = None


class DefaultOptions(ValidatorOptions):
    pass


class ValuesOptions(ValidatorOptions):
    except_: Any = Field(default=None, alias="except")
    proc: Any = None


class AllowBlankOptions(ValidatorOptions):
    value: bool = True


class RegexpOptions(ValidatorOptions):
    value: str | re.Pattern

    @field_validator("value")
    @classmethod
    def _compiles(cls, value: str | re.Pattern) -> str | re.Pattern:
        if isinstance(value, str):
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid pattern {value!r}: {e}") from e
        return value


class LengthOptions(ValidatorOptions):
    min: int | None = Field(default=None, validation_alias=AliasChoices("min", "minimum"))
    max: int | None = Field(default=None, validation_alias=AliasChoices("max", "maximum"))
    is_: int | None = Field(default=None, validation_alias=AliasChoices("is", "is_"))

    @model_validator(mode="after")
    def _bounds(self) -> "LengthOptions":
        if self.min is None and self.max is None and self.is_ is None:
            raise ValueError("one of min, max or is is required")
        if self.is_ is not None and (self.min is not None or self.max is not None):
            raise ValueError("is cannot be combined with min or max")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min {self.min} cannot be greater than max {self.max}")
        return self


class SameAsOptions(ValidatorOptions):
    value: str


class MultipleParamsOptions(ValidatorOptions):
    value: bool = True


@default_registry.register
class PresenceValidator(Validator):
    options_schema = PresenceOptions


@default_registry.register
class CoerceValidator(Validator):
    options_schema = CoerceOptions

    @property
    def type(self) -> Any:
        return self.parsed_options.type

    @property
    def method(self) -> Any:
        return self.parsed_options.method


@default_registry.register
class DefaultValidator(Validator):
    options_schema = DefaultOptions

    @classmethod
    def normalize_options(cls, options: Any) -> Mapping[str, Any]:
        # A default may itself be a mapping
        return {"value": options}


@default_registry.register
class ValuesValidator(Validator):
    options_schema = ValuesOptions


@default_registry.register
class ExceptValuesValidator(Validator):
    options_schema = ValidatorOptions


@default_registry.register
class AllowBlankValidator(Validator):
    options_schema = AllowBlankOptions


@default_registry.register
class RegexpValidator(Validator):
    options_schema = RegexpOptions


@default_registry.register
class LengthValidator(Validator):
    options_schema = LengthOptions


@default_registry.register
class SameAsValidator(Validator):
    options_schema = SameAsOptions


class MultipleParamsValidator(Validator):
    """Validators that relate several attributes of one scope."""

    options_schema = MultipleParamsOptions


@default_registry.register
class MutualExclusionValidator(MultipleParamsValidator):
    pass


@default_registry.register
class ExactlyOneOfValidator(MultipleParamsValidator):
    pass


@default_registry.register
class AtLeastOneOfValidator(MultipleParamsValidator):
    pass


@default_registry.register
class AllOrNoneOfValidator(MultipleParamsValidator):
    pass
