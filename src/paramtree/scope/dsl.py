"""
Declaration DSL mixed into parameter scopes.

    def item_params(item):
        item.requires("price", type=float)
        item.optional("note", type=str, desc="Free text")

    def order_params(params):
        params.requires("items", type=list, block=item_params)
        params.optional("gift", type=bool)
        params.given("gift", block=lambda gift: gift.requires("message", type=str))

    endpoint.params(order_params)

Options are passed as keyword arguments; ``as_`` and ``except_`` stand in
for the reserved words ``as`` and ``except``.
"""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Optional

from paramtree.core.path_utils import validate_attribute_name
from paramtree.core.types import is_group
from paramtree.exceptions import (
    MissingGroupTypeError,
    OptionDeclarationError,
    UnknownParameterError,
    UnsupportedGroupTypeError,
)
from paramtree.rules.models import DependencyCondition

if TYPE_CHECKING:
    from paramtree.scope.params_scope import ParamsScope

Block = Callable[["ParamsScope"], Any]

_RESERVED_ALIASES = {"as_": "as", "except_": "except"}


def normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Map ``as_``/``except_`` keyword spellings to their option names."""
    return {_RESERVED_ALIASES.get(key, key): value for key, value in options.items()}


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge override into base, recursing into nested mappings."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


class ParametersDSL:
    """Parameter declaration methods for `ParamsScope`."""

    def requires(
        self, *attrs: str, block: Block | None = None, **opts: Any
    ) -> Optional["ParamsScope"]:
        """
        Declare required parameters.

        Params:
            *attrs: Parameter names, or "all"/"none" together with ``using``
            block: Declarations of a nested group under ``attrs[0]``
            **opts: Declaration options (type, values, default, desc, ...)

        Returns:
            The nested scope when a block is given, else None
        """
        declared_opts = normalize_options(opts)
        opts = dict(declared_opts)
        opts["presence"] = {"value": True, "message": opts.get("message")}
        if self.group_options:
            opts = deep_merge(self.group_options, opts)

        if opts.get("using") is not None:
            self._require_required_and_optional_fields(attrs[0], opts)
            return None

        self._validate_attributes(attrs, opts, block)
        if block is not None:
            return self.new_scope(attrs[0], declared_opts, block=block)
        self.push_declared_params(attrs, as_=opts.get("as"))
        return None

    def optional(
        self, *attrs: str, block: Block | None = None, **opts: Any
    ) -> Optional["ParamsScope"]:
        """
        Declare optional parameters.

        An optional group (with a block) still needs a group type.

        Returns:
            The nested scope when a block is given, else None

        Raises:
            MissingGroupTypeError: If a group declares no type
            UnsupportedGroupTypeError: If a group type cannot hold parameters
        """
        declared_opts = normalize_options(opts)
        opts = dict(declared_opts)
        group_type = opts.get("type")
        if self.group_options:
            opts = deep_merge(self.group_options, opts)

        if attrs and block is not None:
            if group_type is None:
                raise MissingGroupTypeError(attrs[0])
            if not is_group(group_type):
                raise UnsupportedGroupTypeError(group_type, attrs[0])

        if opts.get("using") is not None:
            self._require_optional_fields(attrs[0], opts)
            return None

        self._validate_attributes(attrs, opts, block)
        if block is not None:
            return self.new_scope(attrs[0], declared_opts, optional=True, block=block)
        self.push_declared_params(attrs, as_=opts.get("as"))
        return None

    group = requires

    def with_(self, block: Block | None = None, **opts: Any) -> "ParamsScope":
        """Apply an option bundle to every declaration made in the block."""
        bundle = deep_merge(self.group_options, normalize_options(opts))
        return self.new_group_scope(bundle, block=block)

    def given(
        self, *attrs: Any, block: Block | None = None, **predicates: Callable[[Any], Any]
    ) -> "ParamsScope":
        """
        Declare parameters that only apply when other parameters are present.

        Params:
            *attrs: Names that must be present and non-blank, or
                (name, predicate) pairs
            block: Declarations of the conditional group
            **predicates: name=predicate conditions on the named values

        Raises:
            UnknownParameterError: If a condition names an undeclared parameter
        """
        declarations = list(attrs)
        if predicates:
            declarations.append(dict(predicates))

        for declaration in declarations:
            for condition in DependencyCondition.parse(declaration):
                if not self.declared_param(condition.key):
                    raise UnknownParameterError(condition.key)

        return self.new_lateral_scope(dependent_on=declarations, block=block)

    def mutually_exclusive(self, *attrs: str, message: Any = None) -> None:
        self.validates(attrs, {"mutual_exclusion": {"value": True, "message": message}})

    def exactly_one_of(self, *attrs: str, message: Any = None) -> None:
        self.validates(attrs, {"exactly_one_of": {"value": True, "message": message}})

    def at_least_one_of(self, *attrs: str, message: Any = None) -> None:
        self.validates(attrs, {"at_least_one_of": {"value": True, "message": message}})

    def all_or_none_of(self, *attrs: str, message: Any = None) -> None:
        self.validates(attrs, {"all_or_none_of": {"value": True, "message": message}})

    def _validate_attributes(
        self, attrs: tuple[str, ...], opts: Mapping[str, Any], block: Block | None
    ) -> None:
        for attr in attrs:
            validate_attribute_name(attr)
        validations = dict(opts)
        if block is not None and validations.get("type") is None:
            validations["type"] = list
        self.validates(attrs, validations)

    def _require_required_and_optional_fields(
        self, context: str, opts: Mapping[str, Any]
    ) -> None:
        using = opts["using"]
        if context == "all":
            optional_fields = _as_list(opts.get("except"))
            required_fields = [name for name in using if name not in optional_fields]
        else:
            required_fields = _as_list(opts.get("except"))
            optional_fields = [name for name in using if name not in required_fields]

        for name in required_fields:
            field_opts = using.get(name)
            if field_opts is None:
                raise OptionDeclarationError(f"required field not exist: {name}")
            self.requires(name, **field_opts)

        for name in optional_fields:
            field_opts = using.get(name)
            if field_opts is not None:
                self.optional(name, **field_opts)

    def _require_optional_fields(self, context: str, opts: Mapping[str, Any]) -> None:
        using = opts["using"]
        optional_fields = list(using)
        if context != "all":
            excluded = _as_list(opts.get("except"))
            optional_fields = [name for name in optional_fields if name not in excluded]

        for name in optional_fields:
            field_opts = using.get(name)
            if field_opts is not None:
                self.optional(name, **field_opts)
