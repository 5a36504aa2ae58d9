"""
Path helpers for bracketed parameter names.

Parameter paths are rendered the way form-encoded request keys are written:
the top-level name followed by one bracketed segment per nesting level,
e.g. ``items[2][price]``.
"""

import re
from typing import Any

from paramtree.exceptions import InvalidAttributeNameError

_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]*)\]")


def brackets(value: Any) -> str:
    """
    Render one bracketed path segment.

    Params:
        value: Segment value; index 0 is a real segment

    Returns:
        "[value]" when value is not None, else an empty string
    """
    if value is None:
        return ""
    return f"[{value}]"


def split_full_name(full_name: str) -> list[str]:
    """
    Split a bracketed parameter path into its segments.

    Params:
        full_name: Path such as "items[2][price]"

    Returns:
        List of segments

    Examples:
        "items[2][price]" -> ["items", "2", "price"]
        "name" -> ["name"]
    """
    if not full_name:
        return []
    head, _, rest = full_name.partition("[")
    if not rest:
        return [head]
    return [head] + _SEGMENT_PATTERN.findall("[" + rest)


def validate_attribute_name(name: Any) -> None:
    """
    Validate a declared attribute name.

    Params:
        name: Attribute name given to a declaration

    Raises:
        InvalidAttributeNameError: If name is not a non-empty string without
            surrounding whitespace or brackets
    """
    if not name or not isinstance(name, str):
        raise InvalidAttributeNameError(name, "must be a non-empty string")

    if name.strip() != name:
        raise InvalidAttributeNameError(
            name, "must not have leading or trailing whitespace"
        )

    if "[" in name or "]" in name:
        raise InvalidAttributeNameError(name, "must not contain brackets")
