"""
Parameter scopes: one level of nested parameter declarations.

A scope is exactly one of:
- root: no parent;
- nested: contained in a named key (``element``) of its parent;
- lateral: subordinate to its parent but sharing the parent's data level,
  as introduced by conditional (`given`) and option (`with_`) groups.

Scopes own their children; a child refers back to its parent through a weak
reference, and the endpoint owns the root scopes.
"""

import logging
import weakref
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Optional

from paramtree.core.data import ABSENT, Keyed, ParamData, Sequence
from paramtree.core.path_utils import brackets
from paramtree.core.types import GroupType, group_type_of, is_group
from paramtree.exceptions import (
    MissingGroupTypeError,
    ScopeStateError,
    UnsupportedGroupTypeError,
)
from paramtree.rules.compiler import compile_rules
from paramtree.rules.models import (
    DependencyCondition,
    DocumentationAttributes,
    SharedOptions,
    ValidatorRegistration,
    as_attribute_tuple,
)
from paramtree.scope.dsl import ParametersDSL

if TYPE_CHECKING:
    from paramtree.endpoint import RouteApi

logger = logging.getLogger(__name__)


class ParamsScope(ParametersDSL):
    """One level of the parameter declaration tree.

    Construction runs the declaration block and then hands the declared
    parameter names to the parent (nested scopes) or the endpoint (root and
    lateral scopes). After construction the scope is immutable and its
    activation checks may be called concurrently.
    """

    def __init__(
        self,
        api: "RouteApi",
        element: str | None = None,
        element_renamed: str | None = None,
        parent: Optional["ParamsScope"] = None,
        optional: bool = False,
        type: Any = None,
        group: Mapping[str, Any] | None = None,
        dependent_on: Iterable[Any] | None = None,
        block: Callable[["ParamsScope"], Any] | None = None,
    ):
        """
        Open a scope and run its declarations.

        Params:
            api: Endpoint owning this scope tree
            element: Key of the parent's data containing this scope
            element_renamed: External name of element for declared params
            parent: Enclosing scope; None for the root
            optional: Whether the whole scope may be absent
            type: Structural type governing the scope (dict, list, ...)
            group: Options merged into every declaration of this scope
            dependent_on: `given` conditions gating this scope
            block: Callable receiving the scope and declaring parameters
        """
        self.api = api
        self.element = element
        self.element_renamed = element_renamed
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._optional = optional
        self.type = type
        self.group_options = dict(group) if group else {}
        self.dependent_on = self._parse_dependencies(dependent_on)
        self.index: int | None = None
        self.children: list["ParamsScope"] = []
        self._declared_params: list[Any] | None = []

        logger.debug("Opening %s scope %s", self.kind, self.display_name)

        if block is not None:
            block(self)

        self.configure_declared_params()

    @staticmethod
    def _parse_dependencies(
        dependent_on: Iterable[Any] | None,
    ) -> tuple[DependencyCondition, ...]:
        if not dependent_on:
            return ()
        conditions: list[DependencyCondition] = []
        for declaration in dependent_on:
            conditions.extend(DependencyCondition.parse(declaration))
        return tuple(conditions)

    @property
    def parent(self) -> Optional["ParamsScope"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def configuration(self) -> Mapping[str, Any]:
        return self.api.configuration

    @property
    def group_type(self) -> GroupType:
        if self.type is None:
            return GroupType.OBJECT
        return group_type_of(self.type)

    @property
    def is_root(self) -> bool:
        return self._parent_ref is None

    @property
    def is_nested(self) -> bool:
        """Whether this scope is contained in one of its parent's elements."""
        return not self.is_root and self.element is not None

    @property
    def is_lateral(self) -> bool:
        """Whether this scope's keys sit at the same level as its parent's."""
        return not self.is_root and self.element is None

    @property
    def is_optional(self) -> bool:
        return self._optional

    @property
    def is_required(self) -> bool:
        return not self._optional

    @property
    def kind(self) -> str:
        if self.is_root:
            return "root"
        return "nested" if self.is_nested else "lateral"

    @property
    def display_name(self) -> str:
        if self.is_nested:
            return self.parent.full_name(self.element)
        return "<" + self.kind + ">"

    def __repr__(self) -> str:
        return f"ParamsScope({self.kind}, {self.display_name})"

    # Naming

    def full_name(self, name: Any, index: int | None = None) -> str:
        """
        Bracketed name of an attribute, with nesting considered.

        Params:
            name: Attribute name within this scope
            index: Array position forwarded by a lateral child

        Returns:
            Name such as "items[2][price]"
        """
        if self.is_nested:
            position = self.index if self.index is not None else index
            return (
                f"{self.parent.full_name(self.element)}"
                f"{brackets(position)}{brackets(name)}"
            )
        if self.is_lateral:
            # Name the attribute as if declared at the parent's level
            return self.parent.full_name(name, index=self.index)
        return str(name)

    @property
    def full_path(self) -> list[str]:
        """Element names from the root down to this scope."""
        if self.is_nested:
            return self.parent.full_path + [self.element]
        if self.is_lateral:
            return self.parent.full_path
        return []

    # Activation

    def params(self, request_params: Any) -> ParamData:
        """
        Narrow request data to the part this scope addresses.

        Params:
            request_params: Full request data

        Returns:
            Narrowed data: the parent's data for lateral scopes, the value
            under element (mapped over arrays) for nested scopes
        """
        if self.parent is not None:
            data = self.parent.params(request_params)
        else:
            data = ParamData.wrap(request_params)

        if self.element is not None:
            data = self._map_params(data, self.element)
        return data

    def _map_params(
        self, data: ParamData, element: str, in_array: bool = False
    ) -> ParamData:
        if isinstance(data, Sequence):
            return Sequence(
                tuple(self._map_params(item, element, True) for item in data.items)
            )
        if isinstance(data, Keyed):
            value = data.get(element)
            if value is None or value is False:
                return ABSENT if self._optional and in_array else Keyed({})
            return ParamData.wrap(value)
        return data

    def should_validate(self, request_params: Any) -> bool:
        """
        Decide whether this scope's validators must run for a request.

        An absent optional scope, an unmet dependency or an inactive ancestor
        all disable the scope.

        Params:
            request_params: Full request data

        Returns:
            True when the scope and all its ancestors are active
        """
        scoped_params = self.params(request_params)

        if self._optional and (
            scoped_params.is_blank() or self._all_elements_blank(scoped_params)
        ):
            return False
        if not self.meets_dependency(scoped_params, request_params):
            return False
        if self.is_root:
            return True

        return self.parent.should_validate(request_params)

    @staticmethod
    def _all_elements_blank(scoped_params: ParamData) -> bool:
        return isinstance(scoped_params, Sequence) and scoped_params.all_items_blank()

    def meets_dependency(self, params: Any, request_params: Any) -> bool:
        """
        Check the `given` conditions of this scope.

        Params:
            params: Data narrowed to this scope (raw or `ParamData`)
            request_params: Full request data

        Returns:
            True when no condition is declared, or when the parent's
            conditions hold and every condition of this scope holds; for
            array data, when any element satisfies them
        """
        if not self.dependent_on:
            return True

        parent = self.parent
        if parent is not None and not parent.meets_dependency(
            parent.params(request_params), request_params
        ):
            return False

        data = ParamData.wrap(params)
        if isinstance(data, Sequence):
            return any(
                self.meets_dependency(item, request_params) for item in data.items
            )

        if not isinstance(data, Keyed):
            return False

        for condition in self.dependent_on:
            value = data.get(condition.key)
            if condition.predicate is not None:
                if not condition.predicate(value):
                    return False
            elif ParamData.wrap(value).is_blank():
                return False

        return True

    # Declared parameters

    @property
    def declared_params(self) -> list[Any]:
        """Names declared so far; only readable while the scope is built."""
        if self._declared_params is None:
            raise ScopeStateError(repr(self), "declared_params")
        return self._declared_params

    def push_declared_params(self, attrs: Iterable[Any], as_: str | None = None) -> None:
        """
        Add parameter names to the declared list.

        Lateral scopes forward to their parent; a rename (``as``) is recorded
        with the endpoint under the parameter's full path.
        """
        attrs = list(attrs)
        if self.is_lateral:
            self.parent.push_declared_params(attrs, as_=as_)
            return

        if as_:
            self._push_renamed_param(self.full_path + [attrs[0]], as_)
        self.declared_params.extend(attrs)

    def _push_renamed_param(self, path: list[Any], new_name: str) -> None:
        self.api.rename_param(tuple(str(segment) for segment in path), str(new_name))

    def configure_declared_params(self) -> None:
        """Hand the declared names over and consume the accumulator."""
        if self.element_renamed:
            self._push_renamed_param(self.full_path, self.element_renamed)

        if self.is_nested:
            self.parent.push_declared_params([{self.element: self.declared_params}])
        else:
            self.api.namespace_stackable("declared_params", self.declared_params)

        self._declared_params = None

    def declared_param(self, param: str) -> bool:
        """Whether a name (or nested group) was declared at this level."""
        if self.is_lateral:
            return self.parent.declared_param(param)
        return any(_first_key_or_param(item) == param for item in self.declared_params)

    # Child scopes

    def new_scope(
        self,
        element: str,
        options: Mapping[str, Any] | None = None,
        optional: bool = False,
        block: Callable[["ParamsScope"], Any] | None = None,
    ) -> "ParamsScope":
        """
        Open a scope nested under one of this scope's elements.

        Raises:
            MissingGroupTypeError: If a required group declares no type
            UnsupportedGroupTypeError: If the type cannot hold parameters
        """
        options = options or {}
        group_type = options.get("type")
        if element and not optional:
            if group_type is None:
                raise MissingGroupTypeError(element)
            if not is_group(group_type):
                raise UnsupportedGroupTypeError(group_type, element)

        scope = ParamsScope(
            api=self.api,
            element=element,
            element_renamed=options.get("as"),
            parent=self,
            optional=optional,
            type=group_type or list,
            block=block,
        )
        self.children.append(scope)
        return scope

    def new_lateral_scope(
        self,
        dependent_on: Iterable[Any] | None = None,
        block: Callable[["ParamsScope"], Any] | None = None,
    ) -> "ParamsScope":
        """Open a conditional scope at this scope's data level."""
        scope = ParamsScope(
            api=self.api,
            parent=self,
            optional=self._optional,
            type=list if self.group_type is GroupType.ARRAY else dict,
            dependent_on=dependent_on,
            block=block,
        )
        self.children.append(scope)
        return scope

    def new_group_scope(
        self,
        group: Mapping[str, Any],
        block: Callable[["ParamsScope"], Any] | None = None,
    ) -> "ParamsScope":
        """Open a scope sharing an option bundle, without a path segment."""
        scope = ParamsScope(
            api=self.api,
            parent=self,
            type=self.type,
            group=group,
            block=block,
        )
        self.children.append(scope)
        return scope

    # Rule compilation

    def validates(self, attrs: Iterable[str] | str, validations: Mapping[str, Any]) -> None:
        """
        Compile a declaration and register its validators with the endpoint.

        Params:
            attrs: Attribute names the declaration covers
            validations: Declaration options; not modified

        Raises:
            OptionDeclarationError: For contradicting coercion options
            IncompatibleOptionValuesError: For contradicting default, values
                and type options
            UnknownValidatorError: For an option naming no validator kind
            InvalidValidatorOptionsError: For options a kind does not accept
        """
        attrs = as_attribute_tuple(attrs)
        compiled = compile_rules(validations)

        if compiled.deprecated_excepts and self.api.deprecation_warnings:
            logger.warning(
                "values={'except': ...} on %s is deprecated, use except_values",
                ", ".join(self.full_name(attr) for attr in attrs),
            )

        self.document_attribute(attrs, compiled.documentation)

        for kind, options in compiled.steps:
            self.validate(kind, options, attrs, compiled.documentation, compiled.opts)

    def validate(
        self,
        kind: str,
        options: Any,
        attrs: tuple[str, ...],
        doc_attrs: DocumentationAttributes,
        opts: SharedOptions,
    ) -> ValidatorRegistration:
        """Register one validator configuration with the endpoint."""
        validator_class = self.api.validator_registry.require(kind)
        validator_class.parse_options(options, name=kind)

        registration = ValidatorRegistration(
            attributes=attrs,
            options=options,
            required=doc_attrs.required,
            scope=self,
            opts=opts,
            validator_class=validator_class,
            kind=kind,
        )
        self.api.namespace_stackable("validations", registration)
        logger.debug("Registered %s validator for %s", kind, list(attrs))
        return registration

    def document_attribute(
        self, attrs: tuple[str, ...], doc_attrs: DocumentationAttributes
    ) -> None:
        full_attrs = [{"name": name, "full_name": self.full_name(name)} for name in attrs]
        self.api.document_attribute(full_attrs, doc_attrs.to_dict())


def _first_key_or_param(item: Any) -> Any:
    if isinstance(item, Mapping):
        return next(iter(item), None)
    return item
