"""
Tests for immutable compiler records.
"""

import attrs
import pytest

from paramtree.rules.models import (
    DependencyCondition,
    DocumentationAttributes,
    RuleSet,
    ValueConstraints,
    as_attribute_tuple,
)


class TestDependencyCondition:
    """Test the accepted forms of `given` conditions."""

    def test_plain_key(self):
        assert DependencyCondition.parse("enabled") == [DependencyCondition("enabled")]

    def test_mapping_of_predicates(self):
        predicate = lambda value: value == "book"  # noqa: E731

        conditions = DependencyCondition.parse({"kind": predicate})

        assert conditions == [DependencyCondition("kind", predicate)]

    def test_pair(self):
        predicate = bool

        assert DependencyCondition.parse(("kind", predicate)) == [
            DependencyCondition("kind", predicate)
        ]

    def test_existing_condition(self):
        condition = DependencyCondition("a")

        assert DependencyCondition.parse(condition) == [condition]

    def test_unsupported_form(self):
        with pytest.raises(TypeError, match="Unsupported dependency declaration"):
            DependencyCondition.parse(42)


class TestRuleSet:
    def test_keeps_declaration_order(self):
        rules = RuleSet.from_mapping({"presence": True, "type": int, "length": 3})

        assert rules.keys() == ["presence", "type", "length"]
        assert len(rules) == 3

    def test_without_returns_copy(self):
        rules = RuleSet.from_mapping({"a": 1, "b": 2})

        trimmed = rules.without("a")

        assert "a" in rules
        assert "a" not in trimmed
        assert trimmed.to_dict() == {"b": 2}

    def test_with_entry_keeps_position(self):
        rules = RuleSet.from_mapping({"a": 1, "b": 2})

        assert rules.with_entry("a", 5).keys() == ["a", "b"]
        assert rules.with_entry("a", 5).get("a") == 5
        assert rules.with_entry("c", 3).keys() == ["a", "b", "c"]

    def test_is_immutable(self):
        rules = RuleSet.from_mapping({"a": 1})

        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            rules.entries = ()


class TestValueConstraints:
    def test_constraint_lists_skip_missing(self):
        constraints = ValueConstraints(values=[1, 2], excepts=[3])

        assert constraints.constraint_lists() == [("values", [1, 2]), ("excepts", [3])]


class TestDocumentationAttributes:
    def test_only_declared_attributes_are_reported(self):
        doc = DocumentationAttributes(required=True, type="int")

        assert doc.to_dict() == {"required": True, "type": "int"}

    def test_attributes_are_read_only(self):
        doc = DocumentationAttributes(required=True)

        with pytest.raises(Exception):
            doc.required = False


def test_as_attribute_tuple():
    assert as_attribute_tuple("name") == ("name",)
    assert as_attribute_tuple(["a", "b"]) == ("a", "b")
