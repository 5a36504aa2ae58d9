"""
Tests for compiling declaration options into validator steps.
"""

import pytest

from paramtree.core.types import JSON, VariantCollectionCoercer
from paramtree.exceptions import IncompatibleOptionValuesError, OptionDeclarationError
from paramtree.rules.compiler import (
    check_incompatible_option_values,
    compile_rules,
    guess_coerce_type,
    infer_coercion,
    start,
)


def step_options(compiled, name):
    return dict(compiled.steps)[name]


class TestStepOrder:
    """Test that presence runs first and coercion second."""

    def test_presence_coerce_then_rest(self):
        compiled = compile_rules({"presence": True, "coerce": int, "length": {"minimum": 1}})

        assert compiled.step_names == ["presence", "coerce", "length"]

    def test_order_is_independent_of_declaration_order(self):
        compiled = compile_rules(
            {"length": {"max": 3}, "type": str, "presence": {"value": True}}
        )

        assert compiled.step_names == ["presence", "coerce", "length"]

    def test_remaining_validators_keep_declaration_order(self):
        compiled = compile_rules({"regexp": "^a", "default": "a", "values": ["a", "b"]})

        assert compiled.step_names == ["regexp", "default", "values"]

    def test_message_is_consumed_by_presence(self):
        compiled = compile_rules({"presence": True, "message": "is missing"})

        assert compiled.step_names == ["presence"]

    def test_rename_is_not_a_validator(self):
        compiled = compile_rules({"as": "full_name", "type": str})

        assert compiled.step_names == ["coerce"]

    def test_caller_options_are_not_modified(self):
        options = {"presence": True, "type": int, "desc": "Count", "fail_fast": True}
        snapshot = dict(options)

        compile_rules(options)

        assert options == snapshot


class TestCoercion:
    """Test resolution of type, types and coerce options."""

    def test_type_becomes_coerce_step(self):
        compiled = compile_rules({"type": int})

        assert step_options(compiled, "coerce") == {
            "type": int,
            "method": None,
            "message": None,
        }
        assert compiled.coerce_type is int

    def test_type_with_message(self):
        compiled = compile_rules({"type": {"value": int, "message": "must be a number"}})

        assert step_options(compiled, "coerce")["type"] is int
        assert step_options(compiled, "coerce")["message"] == "must be a number"

    def test_type_and_types_conflict(self):
        with pytest.raises(OptionDeclarationError, match="type may not be supplied with types"):
            compile_rules({"type": int, "types": [int, str]})

    def test_types_keep_their_list(self):
        compiled = compile_rules({"types": [int, str]})

        assert step_options(compiled, "coerce")["type"] == [int, str]

    def test_variant_type_uses_variant_coercer(self):
        def parse(value):
            return value

        compiled = compile_rules({"type": int | str, "coerce_with": parse})

        coerce = step_options(compiled, "coerce")
        assert coerce["type"] == VariantCollectionCoercer((int, str), parse)
        assert coerce["method"] is None
        assert "coerce_with" not in compiled.step_names

    def test_coerce_with_method(self):
        compiled = compile_rules({"type": list, "coerce_with": str.split})

        assert step_options(compiled, "coerce")["method"] is str.split

    def test_coerce_with_requires_type(self):
        with pytest.raises(OptionDeclarationError, match="must supply type for coerce_with"):
            compile_rules({"coerce_with": int})

    @pytest.mark.parametrize("json_type", [JSON, list[JSON]])
    def test_coerce_with_disallowed_for_json(self, json_type):
        with pytest.raises(OptionDeclarationError, match="coerce_with disallowed for type: JSON"):
            compile_rules({"type": json_type, "coerce_with": str})

    def test_no_type_means_no_coercion(self):
        assert compile_rules({"presence": True}).step_names == ["presence"]


class TestGuessCoerceType:
    """Test element-type guessing for list parameters."""

    def test_list_guesses_from_values(self):
        rules = guess_coerce_type(infer_coercion(start({"type": list, "values": range(1, 6)})))

        assert rules.coerce_type is int
        assert rules.coerce is list

    def test_other_targets_are_left_alone(self):
        rules = guess_coerce_type(infer_coercion(start({"type": str, "values": ["a"]})))

        assert rules.coerce_type is str

    def test_registered_coercion_stays_list(self):
        compiled = compile_rules({"type": list, "values": ["a", "b"]})

        assert step_options(compiled, "coerce")["type"] is list
        assert compiled.documentation.type == "list"

    def test_guessed_type_checks_values(self):
        with pytest.raises(IncompatibleOptionValuesError) as exc_info:
            compile_rules({"type": list, "values": ["a", 1]})

        assert exc_info.value.options == ("type", str, "values", ["a", 1])


class TestDefaultConsistency:
    """Test default vs. values/except_values checks."""

    def test_default_within_values(self):
        compiled = compile_rules({"default": 3, "values": [1, 2, 3]})

        assert compiled.documentation.default == 3

    def test_default_outside_values(self):
        with pytest.raises(IncompatibleOptionValuesError) as exc_info:
            compile_rules({"default": 4, "values": [1, 2, 3]})

        assert exc_info.value.options == ("default", 4, "values", [1, 2, 3])

    def test_default_list_within_values(self):
        compile_rules({"default": [1, 2], "values": [1, 2, 3]})

    def test_default_in_except_values(self):
        with pytest.raises(IncompatibleOptionValuesError) as exc_info:
            compile_rules({"default": 2, "except_values": [2]})

        assert exc_info.value.options == ("default", 2, "except", [2])

    def test_default_in_deprecated_excepts(self):
        with pytest.raises(IncompatibleOptionValuesError) as exc_info:
            compile_rules({"default": 1, "values": {"value": [1, 2], "except": [1]}})

        assert exc_info.value.options == ("default", 1, "except", [1])

    def test_default_within_range(self):
        compile_rules({"default": 5, "values": range(1, 10)})

    @pytest.mark.parametrize("default", [None, False, lambda: 7])
    def test_unchecked_defaults(self, default):
        rules = start({"default": default, "values": [1, 2, 3]})

        assert check_incompatible_option_values(rules) is rules

    def test_predicate_values_are_not_checked(self):
        compile_rules({"default": 10, "values": lambda value: value > 0})


class TestValueCoercion:
    """Test values vs. coercion target checks."""

    def test_values_of_wrong_type(self):
        with pytest.raises(IncompatibleOptionValuesError) as exc_info:
            compile_rules({"type": int, "values": ["a", "b"]})

        assert exc_info.value.options == ("type", int, "values", ["a", "b"])

    def test_values_of_matching_type(self):
        compile_rules({"type": int, "values": [1, 2]})

    def test_range_bounds_are_checked(self):
        compile_rules({"type": int, "values": range(1, 6)})

    def test_list_member_type(self):
        compile_rules({"type": list[int], "values": [1, 2]})
        with pytest.raises(IncompatibleOptionValuesError) as exc_info:
            compile_rules({"type": list[int], "values": [1.5]})

        assert exc_info.value.options[1] is int

    def test_boolean_values(self):
        compile_rules({"type": bool, "values": [True, False]})

    def test_non_boolean_values_for_boolean(self):
        with pytest.raises(IncompatibleOptionValuesError) as exc_info:
            compile_rules({"type": bool, "values": ["yes"]})

        assert exc_info.value.options == ("type", bool, "values", ["yes"])

    def test_except_values_are_checked_too(self):
        with pytest.raises(IncompatibleOptionValuesError):
            compile_rules({"type": int, "except_values": ["x"]})


class TestDocumentation:
    def test_documented_attributes(self):
        compiled = compile_rules(
            {
                "presence": True,
                "type": int,
                "desc": "Number of items",
                "default": 1,
                "values": [1, 2],
            }
        )

        assert compiled.documentation.to_dict() == {
            "required": True,
            "type": "int",
            "desc": "Number of items",
            "default": 1,
            "values": [1, 2],
        }

    def test_description_alias(self):
        compiled = compile_rules({"description": "Name"})

        assert compiled.documentation.desc == "Name"
        assert compiled.step_names == []

    def test_optional_is_not_required(self):
        assert compile_rules({"type": str}).documentation.required is False

    def test_extra_documentation(self):
        compiled = compile_rules({"documentation": {"example": 3}})

        assert compiled.documentation.documentation == {"example": 3}
        assert compiled.step_names == []


class TestSharedOptions:
    def test_fail_fast_is_shared_not_a_step(self):
        compiled = compile_rules({"presence": True, "fail_fast": True})

        assert compiled.opts.fail_fast is True
        assert compiled.step_names == ["presence"]

    def test_allow_blank_is_shared_and_registered(self):
        compiled = compile_rules({"allow_blank": {"value": False, "message": "empty"}})

        assert compiled.opts.allow_blank is False
        assert compiled.step_names == ["allow_blank"]

    def test_deprecated_excepts_are_flagged(self):
        assert compile_rules({"values": {"value": [1], "except": [2]}}).deprecated_excepts
        assert not compile_rules({"values": [1]}).deprecated_excepts
