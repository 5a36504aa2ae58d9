"""
Base class for parameter validators.

Validators are configured at declaration time and executed later by the
request layer. This module only covers the configuration side: every kind
declares a pydantic options schema, and options are checked against it
when the validator is registered.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from paramtree.exceptions import InvalidValidatorOptionsError
from paramtree.rules.models import SharedOptions

if TYPE_CHECKING:
    from paramtree.scope.params_scope import ParamsScope


class ValidatorOptions(BaseModel):
    """Base options schema: a wrapped value and an optional message."""

    model_config = ConfigDict(
        extra="forbid", arbitrary_types_allowed=True, populate_by_name=True
    )

    value: Any = None
    message: Any = None


class Validator:
    """Configured validator for one or more attributes of a scope.

    Subclasses set `options_schema`; the registry maps a kind name to the
    subclass.
    """

    kind: ClassVar[str] = ""
    options_schema: ClassVar[type[BaseModel]] = ValidatorOptions

    def __init__(
        self,
        attributes: tuple[str, ...],
        options: Any,
        required: bool,
        scope: "ParamsScope",
        opts: SharedOptions | None = None,
    ):
        self.attributes = tuple(attributes)
        self.options = options
        self.parsed_options = self.parse_options(options)
        self.required = required
        self.scope = scope
        self.opts = opts or SharedOptions()

    @classmethod
    def normalize_options(cls, options: Any) -> Mapping[str, Any]:
        """Bring raw options into mapping form; bare values become ``value``."""
        if isinstance(options, Mapping):
            return options
        return {"value": options}

    @classmethod
    def parse_options(cls, options: Any, name: str | None = None) -> BaseModel:
        """
        Check raw options against this kind's schema.

        Params:
            options: Options given in the declaration
            name: Kind name used for error reporting

        Returns:
            Parsed options model

        Raises:
            InvalidValidatorOptionsError: If the options do not fit the schema
        """
        try:
            return cls.options_schema.model_validate(cls.normalize_options(options))
        except ValidationError as e:
            raise InvalidValidatorOptionsError(name or cls.kind, str(e)) from e

    @property
    def message(self) -> Any:
        return getattr(self.parsed_options, "message", None)

    @property
    def fail_fast(self) -> bool:
        return self.opts.fail_fast

    @property
    def allow_blank(self) -> Any:
        return self.opts.allow_blank

    def full_names(self) -> list[str]:
        """Bracketed names of the validated attributes, for error reporting."""
        return [self.scope.full_name(attribute) for attribute in self.attributes]

    def should_run(self, request_params: Any) -> bool:
        """Whether the owning scope is active for this request."""
        return self.scope.should_validate(request_params)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(attributes={list(self.attributes)!r})"
