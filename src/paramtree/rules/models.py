"""
Records produced while compiling parameter declarations.

A declaration's options are copied into an immutable `RuleSet` and threaded
through the compiler as a `ResolvedRules` record; each compiler step returns
an evolved copy instead of editing the caller's options in place.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from attrs import field, frozen
from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from paramtree.scope.params_scope import ParamsScope
    from paramtree.validators.base import Validator


@frozen
class DependencyCondition:
    """Condition gating a lateral scope.

    A plain condition requires the key to be present and non-blank in the
    parent's data; a predicate condition requires ``predicate(data[key])``
    to be truthy.
    """

    key: str
    predicate: Callable[[Any], Any] | None = None

    @classmethod
    def parse(cls, declaration: Any) -> list["DependencyCondition"]:
        """
        Build conditions from one `given` argument.

        Params:
            declaration: A key, a (key, predicate) pair, a mapping of
                key -> predicate, or an existing condition

        Returns:
            List of conditions in declaration order

        Raises:
            TypeError: If the declaration has none of the accepted forms
        """
        if isinstance(declaration, DependencyCondition):
            return [declaration]
        if isinstance(declaration, str):
            return [cls(declaration)]
        if isinstance(declaration, Mapping):
            return [cls(key, predicate) for key, predicate in declaration.items()]
        if isinstance(declaration, tuple) and len(declaration) == 2:
            key, predicate = declaration
            return [cls(key, predicate)]
        raise TypeError(f"Unsupported dependency declaration: {declaration!r}")


@frozen
class RuleSet:
    """Ordered, immutable view of a declaration's options."""

    entries: tuple[tuple[str, Any], ...] = field(factory=tuple)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "RuleSet":
        return cls(tuple(options.items()))

    def __contains__(self, key: str) -> bool:
        return any(name == key for name, _ in self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str, default: Any = None) -> Any:
        for name, value in self.entries:
            if name == key:
                return value
        return default

    def keys(self) -> list[str]:
        return [name for name, _ in self.entries]

    def without(self, *keys: str) -> "RuleSet":
        """Return a copy with the given keys removed."""
        return RuleSet(tuple((n, v) for n, v in self.entries if n not in keys))

    def with_entry(self, key: str, value: Any) -> "RuleSet":
        """Return a copy with key set, keeping its position when it exists."""
        if key in self:
            return RuleSet(
                tuple((n, value if n == key else v) for n, v in self.entries)
            )
        return RuleSet(self.entries + ((key, value),))

    def to_dict(self) -> dict[str, Any]:
        return dict(self.entries)


@frozen
class ValueConstraints:
    """Allowed/excluded values and default extracted from a declaration."""

    values: Any = None
    except_values: Any = None
    excepts: Any = None
    default: Any = None
    has_default: bool = False

    def constraint_lists(self) -> list[tuple[str, Any]]:
        """Non-empty constraints with the option name they are reported as."""
        pairs = [
            ("values", self.values),
            ("except_values", self.except_values),
            ("excepts", self.excepts),
        ]
        return [(name, value) for name, value in pairs if value is not None]


@frozen
class SharedOptions:
    """Options every validator of one declaration receives."""

    allow_blank: Any = None
    fail_fast: bool = False


class DocumentationAttributes(BaseModel):
    """Read-only documentation snapshot for a declaration."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    required: bool = False
    type: str | None = None
    desc: Any = None
    default: Any = None
    values: Any = None
    except_values: Any = None
    documentation: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return only the attributes that were actually declared."""
        return self.model_dump(exclude_unset=True)


@frozen
class ResolvedRules:
    """Accumulated state of one declaration moving through the compiler."""

    validations: RuleSet
    constraints: ValueConstraints = field(factory=ValueConstraints)
    coerce: Any = None
    coerce_type: Any = None
    coerce_message: Any = None
    documentation: Mapping[str, Any] = field(factory=dict)
    opts: SharedOptions = field(factory=SharedOptions)
    steps: tuple[tuple[str, Any], ...] = field(factory=tuple)
    deprecated_excepts: bool = False

    @property
    def has_coerce(self) -> bool:
        return self.coerce is not None


@frozen
class CompiledRules:
    """Final compiler output: documentation plus ordered validator steps."""

    documentation: DocumentationAttributes
    opts: SharedOptions
    steps: tuple[tuple[str, Any], ...]
    coerce_type: Any = None
    deprecated_excepts: bool = False

    @property
    def step_names(self) -> list[str]:
        return [name for name, _ in self.steps]


@frozen
class ValidatorRegistration:
    """Configuration record appended to an endpoint's validations."""

    attributes: tuple[str, ...]
    options: Any
    required: bool
    scope: "ParamsScope"
    opts: SharedOptions
    validator_class: type["Validator"]
    kind: str

    def build(self) -> "Validator":
        """Instantiate the validator this record configures."""
        return self.validator_class(
            attributes=self.attributes,
            options=self.options,
            required=self.required,
            scope=self.scope,
            opts=self.opts,
        )


def as_attribute_tuple(attrs: Iterable[str] | str) -> tuple[str, ...]:
    """Normalize one attribute name or several into a tuple."""
    if isinstance(attrs, str):
        return (attrs,)
    return tuple(attrs)
