"""
Narrowed parameter data for scope activation decisions.

Request data reaching a scope is one of four shapes. `ParamData.wrap`
classifies raw request data once so dependency and activation logic can
branch on the shape instead of probing the raw value's capabilities.
"""

from collections.abc import Mapping
from typing import Any

from attrs import field, frozen


def is_blank(value: Any) -> bool:
    """
    Check whether a raw value counts as blank.

    Params:
        value: Raw request value

    Returns:
        True for None, False, whitespace-only strings and empty collections
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return len(value) == 0
    return False


class ParamData:
    """Base class for the closed set of narrowed data shapes."""

    @staticmethod
    def wrap(raw: Any) -> "ParamData":
        """
        Classify raw request data.

        Params:
            raw: Value taken from the request (or already wrapped data)

        Returns:
            Keyed for mappings, Sequence for lists/tuples, Absent for None,
            Scalar for everything else
        """
        if isinstance(raw, ParamData):
            return raw
        if raw is None:
            return ABSENT
        if isinstance(raw, Mapping):
            return Keyed(raw)
        if isinstance(raw, (list, tuple)):
            return Sequence(tuple(ParamData.wrap(item) for item in raw))
        return Scalar(raw)

    def is_blank(self) -> bool:
        raise NotImplementedError

    def unwrap(self) -> Any:
        """Return the raw value this data was built from."""
        raise NotImplementedError


@frozen
class Absent(ParamData):
    """No data at all for the scope."""

    def is_blank(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return None


ABSENT = Absent()


@frozen
class Scalar(ParamData):
    """A single non-container value."""

    value: Any

    def is_blank(self) -> bool:
        return is_blank(self.value)

    def unwrap(self) -> Any:
        return self.value


@frozen
class Sequence(ParamData):
    """Array data; every item is itself narrowed data."""

    items: tuple[ParamData, ...] = field(factory=tuple)

    def is_blank(self) -> bool:
        return len(self.items) == 0

    def all_items_blank(self) -> bool:
        return all(item.is_blank() for item in self.items)

    def unwrap(self) -> Any:
        return [item.unwrap() for item in self.items]


@frozen
class Keyed(ParamData):
    """Object data supporting key lookup."""

    mapping: Mapping = field(factory=dict)

    def get(self, key: str) -> Any:
        """Look a key up, returning None when it is missing."""
        return self.mapping.get(key)

    def is_blank(self) -> bool:
        return len(self.mapping) == 0

    def unwrap(self) -> Any:
        return self.mapping
