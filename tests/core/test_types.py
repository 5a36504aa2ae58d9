"""
Tests for core type predicates and type naming.
"""

from typing import Union

import pytest

from paramtree.core.types import (
    JSON,
    Boolean,
    GroupType,
    VariantCollectionCoercer,
    group_type_of,
    is_boolean,
    is_checkable,
    is_group,
    is_json,
    is_multiple,
    member_type,
    type_name,
)


class TestGroupTypes:
    """Test recognition of types that can govern a parameter group."""

    @pytest.mark.parametrize("group", [dict, list, JSON, list[JSON]])
    def test_group_types_are_recognized(self, group):
        assert is_group(group)

    @pytest.mark.parametrize("value", [str, int, list[int], set, None, "list"])
    def test_other_types_are_not_groups(self, value):
        assert not is_group(value)

    def test_group_type_of_arrays(self):
        assert group_type_of(list) is GroupType.ARRAY
        assert group_type_of(list[JSON]) is GroupType.ARRAY

    def test_group_type_of_objects(self):
        assert group_type_of(dict) is GroupType.OBJECT
        assert group_type_of(JSON) is GroupType.OBJECT


class TestVariantTypes:
    """Test detection of coercion targets made of several types."""

    def test_list_of_several_types_is_multiple(self):
        assert is_multiple([int, str])
        assert is_multiple((int, float))
        assert is_multiple({int, str})

    def test_single_member_forms_are_not_multiple(self):
        assert not is_multiple([int])
        assert not is_multiple(int)
        assert not is_multiple(list[int])

    def test_unions_are_multiple(self):
        assert is_multiple(int | str)
        assert is_multiple(Union[int, str])

    def test_optional_is_not_multiple(self):
        assert not is_multiple(int | None)


class TestBoolean:
    """Test boolean normalization of constraint values."""

    def test_real_booleans_pass_through(self):
        assert Boolean.build(True) is True
        assert Boolean.build(False) is False

    def test_other_values_do_not_normalize(self):
        assert Boolean.build("true") is None
        assert Boolean.build(1) is None
        assert Boolean.build(0) is None

    def test_bool_and_boolean_are_boolean_targets(self):
        assert is_boolean(bool)
        assert is_boolean(Boolean)
        assert not is_boolean(int)


class TestMemberType:
    """Test resolution of the type individual values must have."""

    def test_list_forms_resolve_to_member(self):
        assert member_type([int]) is int
        assert member_type(list[int]) is int
        assert member_type([int, str]) is int

    def test_plain_types_are_unchanged(self):
        assert member_type(int) is int
        assert member_type(list) is list

    def test_checkable_targets(self):
        assert is_checkable(int)
        assert is_checkable(int | str)
        assert not is_checkable(list[int])
        assert not is_checkable(VariantCollectionCoercer((int, str)))


class TestTypeName:
    """Test rendering coercion targets for documentation."""

    def test_plain_type(self):
        assert type_name(int) == "int"

    def test_generic_alias(self):
        assert type_name(list[int]) == "list[int]"
        assert type_name(list[JSON]) == "list[JSON]"

    def test_list_of_types(self):
        assert type_name([int, str]) == "[int, str]"

    def test_union(self):
        assert type_name(int | str) == "int | str"

    def test_variant_coercer(self):
        assert type_name(VariantCollectionCoercer((int, float))) == "[int, float]"

    def test_json_detection(self):
        assert is_json(JSON)
        assert is_json(list[JSON])
        assert not is_json(dict)
