"""
Rule compiler for parameter declarations.

Turns the option bag of one declaration into documentation attributes and an
ordered list of validator steps. Every step is a pure function from one
`ResolvedRules` record to the next; `compile_rules` runs them in the only
order that keeps their semantics:

1. coercion inference (``type`` / ``types`` / ``coerce``)
2. element-type guessing from ``values`` for list targets
3. default vs. allowed/excluded values consistency
4. allowed/excluded values vs. coercion target compatibility
5. documentation extraction
6. shared validator options (``allow_blank``, ``fail_fast``)
7. presence, then coercion, then every remaining validator
"""

from collections.abc import Mapping
from typing import Any, get_args

from attrs import evolve

from paramtree.core.types import (
    Boolean,
    VariantCollectionCoercer,
    is_boolean,
    is_checkable,
    is_json,
    is_multiple,
    is_union,
    member_type,
    type_name,
)
from paramtree.exceptions import IncompatibleOptionValuesError, OptionDeclarationError
from paramtree.rules.models import (
    CompiledRules,
    DocumentationAttributes,
    ResolvedRules,
    RuleSet,
    SharedOptions,
    ValueConstraints,
)

COERCION_KEYS = ("coerce", "coerce_with", "coerce_message")

# Keys consumed by ordering rather than registered as validators
ORDER_SPECIFIC_KEYS = frozenset({"as"})


def has_option(options: Any, key: str) -> bool:
    """Check whether an option uses the ``{key: value}`` wrapper form."""
    return isinstance(options, Mapping) and options.get(key) is not None


def _is_predicate(value: Any) -> bool:
    return callable(value)


def _as_list(value: Any) -> list:
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _first_value(values: Any) -> Any:
    if isinstance(values, range):
        return values.start
    return next(iter(values))


def _bounds(values: Any) -> list:
    if isinstance(values, range):
        return [values.start, values.stop]
    return list(values)


def extract_constraints(validations: RuleSet) -> ValueConstraints:
    """
    Pull allowed values, excluded values and default out of a declaration.

    ``values`` may be given in the deprecated ``{"value": ..., "except": ...}``
    form; its ``except`` entry is kept separately as ``excepts``.

    Params:
        validations: Declaration options

    Returns:
        ValueConstraints for the consistency checks
    """
    values_option = validations.get("values")
    excepts = None
    if isinstance(values_option, Mapping):
        values = values_option.get("value")
        excepts = values_option.get("except")
    else:
        values = values_option

    except_option = validations.get("except_values")
    if has_option(except_option, "value"):
        except_values = except_option["value"]
    else:
        except_values = except_option

    return ValueConstraints(
        values=values,
        except_values=except_values,
        excepts=excepts,
        default=validations.get("default"),
        has_default="default" in validations,
    )


def start(validations: Mapping[str, Any]) -> ResolvedRules:
    """Copy a declaration's options into the initial compiler record."""
    rules = RuleSet.from_mapping(validations)
    values_option = rules.get("values")
    return ResolvedRules(
        validations=rules,
        constraints=extract_constraints(rules),
        deprecated_excepts=isinstance(values_option, Mapping)
        and values_option.get("except") is not None,
    )


def infer_coercion(rules: ResolvedRules) -> ResolvedRules:
    """
    Resolve ``type``/``types`` into a coercion target.

    Params:
        rules: Current compiler record

    Returns:
        Record with coerce, coerce_type and coerce_message set and the raw
        ``type``/``types`` entries removed

    Raises:
        OptionDeclarationError: If both ``type`` and ``types`` are given
    """
    validations = rules.validations
    if "type" in validations and "types" in validations:
        raise OptionDeclarationError("type may not be supplied with types")

    coerce = validations.get("coerce")
    coerce_message = validations.get("coerce_message")
    for key in ("type", "types"):
        if key not in validations:
            continue
        option = validations.get(key)
        coerce = option["value"] if has_option(option, "value") else option
        coerce_message = option["message"] if has_option(option, "message") else None

    coerce_type = coerce
    validations = validations.without("types")

    # A single declared type that is itself a variant of several types
    if is_multiple(coerce_type) and "type" in rules.validations:
        members = get_args(coerce_type) if is_union(coerce_type) else coerce_type
        coerce = VariantCollectionCoercer(
            tuple(member for member in members if member is not type(None)),
            validations.get("coerce_with"),
        )
        validations = validations.without("coerce_with")

    validations = validations.without("type", "coerce", "coerce_message")
    documentation = dict(rules.documentation)
    if coerce_type is not None:
        documentation["type"] = type_name(coerce_type)
    return evolve(
        rules,
        validations=validations,
        documentation=documentation,
        coerce=coerce,
        coerce_type=coerce_type,
        coerce_message=coerce_message,
    )


def guess_coerce_type(rules: ResolvedRules) -> ResolvedRules:
    """
    Narrow a plain ``list`` target using the declared values.

    ``values=range(1, 6)`` on a list parameter means every element is an
    int, so the compatibility check runs against int rather than list.
    """
    if rules.coerce_type is not list:
        return rules

    constraints = rules.constraints
    for values in (constraints.values, constraints.except_values, constraints.excepts):
        if not values or _is_predicate(values):
            continue
        return evolve(rules, coerce_type=type(_first_value(values)))
    return rules


def check_incompatible_option_values(rules: ResolvedRules) -> ResolvedRules:
    """
    Ensure the default is allowed by ``values`` and not excluded.

    Raises:
        IncompatibleOptionValuesError: If a default value is outside
            ``values`` or inside ``except_values``/``excepts``
    """
    constraints = rules.constraints
    default = constraints.default
    if default is None or default is False or _is_predicate(default):
        return rules

    defaults = _as_list(default)
    values = constraints.values
    if values is not None and not _is_predicate(values):
        if not all(item in values for item in defaults):
            raise IncompatibleOptionValuesError("default", default, "values", values)

    for excluded in (constraints.except_values, constraints.excepts):
        if not excluded or _is_predicate(excluded):
            continue
        if any(item in excluded for item in defaults):
            raise IncompatibleOptionValuesError("default", default, "except", excluded)

    return rules


def validate_value_coercion(rules: ResolvedRules) -> ResolvedRules:
    """
    Ensure declared values already have the coercion target's type.

    A boolean target normalizes the values through `Boolean.build` first,
    so ``values=[True, False]`` passes while ``values=["yes"]`` does not.

    Raises:
        IncompatibleOptionValuesError: If a value is not an instance of the
            coercion target
    """
    if rules.coerce_type is None:
        return rules

    target = member_type(rules.coerce_type)
    if not is_boolean(target) and not is_checkable(target):
        return rules

    constraints = rules.constraints
    for values in (constraints.values, constraints.except_values, constraints.excepts):
        if not values or _is_predicate(values):
            continue

        candidates = _bounds(values)
        if is_boolean(target):
            candidates = [Boolean.build(item) for item in candidates]
            matches = all(isinstance(item, bool) for item in candidates)
        else:
            matches = all(isinstance(item, target) for item in candidates)

        if not matches:
            raise IncompatibleOptionValuesError("type", target, "values", values)

    return rules


def extract_documentation(rules: ResolvedRules) -> ResolvedRules:
    """Collect documentation attributes and drop doc-only options."""
    validations = rules.validations
    constraints = rules.constraints
    documentation: dict[str, Any] = {
        "required": "presence" in validations,
        **rules.documentation,
    }

    desc = validations.get("desc") or validations.get("description")
    if desc:
        documentation["desc"] = desc

    if constraints.has_default:
        documentation["default"] = constraints.default

    if constraints.values:
        documentation["values"] = constraints.values

    if constraints.except_values:
        documentation["except_values"] = constraints.except_values

    if "documentation" in validations:
        documentation["documentation"] = validations.get("documentation")

    return evolve(
        rules,
        validations=validations.without("desc", "description", "documentation"),
        documentation=documentation,
    )


def derive_validator_options(rules: ResolvedRules) -> ResolvedRules:
    """Derive the options shared by every validator of the declaration."""
    validations = rules.validations
    allow_blank = validations.get("allow_blank")
    if isinstance(allow_blank, Mapping):
        allow_blank = allow_blank.get("value")

    opts = SharedOptions(
        allow_blank=allow_blank,
        fail_fast=bool(validations.get("fail_fast") or False),
    )
    return evolve(rules, validations=validations.without("fail_fast"), opts=opts)


def check_coerce_with(rules: ResolvedRules) -> None:
    """
    Enforce correct usage of ``coerce_with``.

    Raises:
        OptionDeclarationError: If ``coerce_with`` is given without a type, or
            with JSON which already implies its own coercion method
    """
    if "coerce_with" not in rules.validations:
        return
    if not rules.has_coerce:
        raise OptionDeclarationError("must supply type for coerce_with")
    if is_json(rules.coerce):
        raise OptionDeclarationError("coerce_with disallowed for type: JSON")


def order_validators(rules: ResolvedRules) -> ResolvedRules:
    """
    Lay out validator steps: presence first, coercion second, then the rest.

    Later validators assume the value is present and already coerced.
    """
    validations = rules.validations
    steps: list[tuple[str, Any]] = []
    handled = set(ORDER_SPECIFIC_KEYS)

    if validations.get("presence"):
        steps.append(("presence", validations.get("presence")))
        handled.add("presence")
        if "message" in validations:
            handled.add("message")

    check_coerce_with(rules)
    if rules.has_coerce:
        steps.append(
            (
                "coerce",
                {
                    "type": rules.coerce,
                    "method": validations.get("coerce_with"),
                    "message": rules.coerce_message,
                },
            )
        )
    handled.update(COERCION_KEYS)

    for name, options in validations:
        if name in handled:
            continue
        steps.append((name, options))

    return evolve(rules, validations=validations.without(*handled), steps=tuple(steps))


PIPELINE = (
    infer_coercion,
    guess_coerce_type,
    check_incompatible_option_values,
    validate_value_coercion,
    extract_documentation,
    derive_validator_options,
    order_validators,
)


def compile_rules(validations: Mapping[str, Any]) -> CompiledRules:
    """
    Compile one declaration's options.

    The caller's mapping is never modified.

    Params:
        validations: Option bag of a `requires`/`optional` declaration

    Returns:
        CompiledRules with documentation, shared options and ordered steps

    Raises:
        OptionDeclarationError: For contradicting coercion options
        IncompatibleOptionValuesError: For defaults or values that contradict
            the other options
    """
    rules = start(validations)
    for step in PIPELINE:
        rules = step(rules)

    return CompiledRules(
        documentation=DocumentationAttributes(**rules.documentation),
        opts=rules.opts,
        steps=rules.steps,
        coerce_type=rules.coerce_type,
        deprecated_excepts=rules.deprecated_excepts,
    )
