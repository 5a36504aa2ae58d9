"""
Core type definitions for ParamTree parameter declarations.

This module contains the marker types, structural group predicates and type
naming helpers shared by scopes and the rule compiler.
"""

import types
from enum import Enum
from typing import Any, Union, get_args, get_origin

from attrs import frozen

ParamValue = str | int | float | bool | list | dict | None

OptionsDict = dict[str, Any]

_SEQUENCE_FORMS = (list, tuple, set, frozenset)


class JSON:
    """Marker type for parameters that arrive as JSON documents.

    JSON implies its own coercion method, so it may not be combined with
    ``coerce_with``.
    """


class Boolean:
    """Marker type for boolean parameters.

    ``bool`` and ``Boolean`` are interchangeable as coercion targets.
    """

    @staticmethod
    def build(value: Any) -> bool | None:
        """Normalize a value the same way boolean input is normalized.

        Params:
            value: Candidate value

        Returns:
            The value itself when it is a real boolean, otherwise None
        """
        if not isinstance(value, bool):
            return None
        return value


class GroupType(Enum):
    """Structural kinds a parameter scope can model."""

    OBJECT = "object"
    ARRAY = "array"


GROUP_TYPES = (dict, list, JSON, list[JSON])


@frozen
class VariantCollectionCoercer:
    """Coercion target for a parameter that accepts one of several types."""

    types: tuple
    method: Any = None


def is_union(value: Any) -> bool:
    """Check whether value is a ``Union[...]`` or ``X | Y`` annotation."""
    return get_origin(value) in (Union, types.UnionType)


def is_group(value: Any) -> bool:
    """
    Check whether a type can govern a parameter group.

    Params:
        value: Declared structural type of a group

    Returns:
        True for dict, list, JSON and list[JSON]
    """
    if value is None:
        return False
    return any(value == group for group in GROUP_TYPES)


def is_multiple(value: Any) -> bool:
    """
    Check whether a coercion target is a variant of several primitive types.

    Params:
        value: Coercion target

    Returns:
        True for a list/tuple/set of more than one type, or a union of more
        than one non-None member
    """
    if isinstance(value, _SEQUENCE_FORMS):
        return len(value) > 1
    if is_union(value):
        members = [arg for arg in get_args(value) if arg is not type(None)]
        return len(members) > 1
    return False


def is_boolean(value: Any) -> bool:
    """Check whether a coercion target is boolean."""
    return value is bool or value is Boolean


def is_json(value: Any) -> bool:
    """Check whether a coercion target is JSON or list[JSON]."""
    return value is JSON or value == list[JSON]


def group_type_of(value: Any) -> GroupType:
    """Map a declared structural type to the group kind it models."""
    if value is list or get_origin(value) is list:
        return GroupType.ARRAY
    return GroupType.OBJECT


def member_type(value: Any) -> Any:
    """
    Resolve the type that individual constraint values must have.

    A list form such as ``[int]`` or ``list[int]`` constrains its members, so
    the first member type is returned. Other targets are returned unchanged.

    Params:
        value: Coercion target

    Returns:
        Type to check constraint values against
    """
    if isinstance(value, (list, tuple)):
        return value[0] if value else value
    if get_origin(value) in (list, set, frozenset):
        args = get_args(value)
        return args[0] if args else get_origin(value)
    return value


def is_checkable(value: Any) -> bool:
    """Check whether value can be used as the second argument of isinstance."""
    if is_union(value):
        return True
    return isinstance(value, type) and get_origin(value) is None


def type_name(value: Any) -> str:
    """
    Render a coercion target for documentation.

    Params:
        value: Type, list of types, union, generic alias or coercer

    Returns:
        Readable name such as "int", "list[int]", "[int, str]" or "int | str"

    Examples:
        int -> "int"
        list[JSON] -> "list[JSON]"
        [int, str] -> "[int, str]"
    """
    if isinstance(value, VariantCollectionCoercer):
        return type_name(list(value.types))
    if isinstance(value, _SEQUENCE_FORMS):
        return "[" + ", ".join(type_name(item) for item in value) + "]"
    if is_union(value):
        return " | ".join(type_name(arg) for arg in get_args(value))
    origin = get_origin(value)
    if origin is not None:
        args = ", ".join(type_name(arg) for arg in get_args(value))
        return f"{type_name(origin)}[{args}]"
    if value is type(None):
        return "None"
    if isinstance(value, type):
        return value.__name__
    return str(value)
