"""
Core ParamTree components.

This package provides the marker types, narrowed request data shapes and
path helpers that scopes and the rule compiler are built on.
"""

from paramtree.core.data import (
    ABSENT,
    Absent,
    Keyed,
    ParamData,
    Scalar,
    Sequence,
    is_blank,
)
from paramtree.core.path_utils import (
    brackets,
    split_full_name,
    validate_attribute_name,
)
from paramtree.core.types import (
    JSON,
    Boolean,
    GroupType,
    OptionsDict,
    ParamValue,
    VariantCollectionCoercer,
    group_type_of,
    is_boolean,
    is_group,
    is_json,
    is_multiple,
    type_name,
)

__all__ = [
    "ABSENT",
    "Absent",
    "Keyed",
    "ParamData",
    "Scalar",
    "Sequence",
    "is_blank",
    "brackets",
    "split_full_name",
    "validate_attribute_name",
    "JSON",
    "Boolean",
    "GroupType",
    "OptionsDict",
    "ParamValue",
    "VariantCollectionCoercer",
    "group_type_of",
    "is_boolean",
    "is_group",
    "is_json",
    "is_multiple",
    "type_name",
]
