"""
ParamTree validator kinds and their registry.
"""

from paramtree.validators.base import Validator, ValidatorOptions
from paramtree.validators.builtin import (
    AllOrNoneOfValidator,
    AllowBlankValidator,
    AtLeastOneOfValidator,
    CoerceValidator,
    DefaultValidator,
    ExactlyOneOfValidator,
    ExceptValuesValidator,
    LengthValidator,
    MultipleParamsValidator,
    MutualExclusionValidator,
    PresenceValidator,
    RegexpValidator,
    SameAsValidator,
    ValuesValidator,
)
from paramtree.validators.registry import (
    ValidatorRegistry,
    default_registry,
    kind_name,
    require_validator,
)

__all__ = [
    "Validator",
    "ValidatorOptions",
    "ValidatorRegistry",
    "default_registry",
    "kind_name",
    "require_validator",
    "AllOrNoneOfValidator",
    "AllowBlankValidator",
    "AtLeastOneOfValidator",
    "CoerceValidator",
    "DefaultValidator",
    "ExactlyOneOfValidator",
    "ExceptValuesValidator",
    "LengthValidator",
    "MultipleParamsValidator",
    "MutualExclusionValidator",
    "PresenceValidator",
    "RegexpValidator",
    "SameAsValidator",
    "ValuesValidator",
]
