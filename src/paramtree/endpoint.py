"""
Endpoint: the route-level owner of parameter scopes.

A parameter scope never stores documentation, renamed parameters, declared
parameters or validators itself; it hands them to the endpoint that owns
it. `RouteApi` names that contract and `Endpoint` is the in-memory
implementation used by applications and tests.
"""

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from paramtree.rules.models import ValidatorRegistration
from paramtree.validators import Validator, ValidatorRegistry, default_registry

if TYPE_CHECKING:
    from paramtree.scope.params_scope import ParamsScope

_UNSET = object()


@dataclass
class EndpointConfig:
    """Configuration for an endpoint's parameter declarations."""

    configuration: dict[str, Any] = field(default_factory=dict)
    deprecation_warnings: bool = True  # Warn on values={"except": ...}
    validator_registry: ValidatorRegistry = field(
        default_factory=lambda: default_registry
    )

    @classmethod
    def from_dict(cls, config: dict | None = None) -> "EndpointConfig":
        """Factory method to create config from dict with defaults."""
        if config is None:
            config = {}
        return cls(**config)


class RouteApi(Protocol):
    """Collaborator contract a parameter scope relies on."""

    @property
    def configuration(self) -> Mapping[str, Any]: ...

    @property
    def validator_registry(self) -> ValidatorRegistry: ...

    @property
    def deprecation_warnings(self) -> bool: ...

    def route_setting(self, key: str, value: Any = _UNSET) -> Any: ...

    def namespace_stackable(self, key: str, value: Any = _UNSET) -> list[Any]: ...

    def rename_param(self, path: tuple[str, ...], new_name: str) -> None: ...

    def document_attribute(
        self, names: list[dict[str, str]], doc_attrs: Mapping[str, Any]
    ) -> None: ...


class Endpoint:
    """In-memory route owning parameter scopes and everything they register.

    Responsibilities:
      - Own the root scopes built through `params`.
      - Keep route settings (e.g. renamed parameters) and append-only
        stackable settings (declared parameters, validator registrations).
      - Collect documentation attributes keyed by full parameter name.

    Notes:
      - Stackable settings are appended under a lock so independent scope
        trees may be built concurrently for the same endpoint.
    """

    def __init__(self, config: EndpointConfig | None = None):
        self.config = config or EndpointConfig()
        self.documentation: dict[str, dict[str, Any]] = {}
        self.scopes: list["ParamsScope"] = []
        self._settings: dict[str, Any] = {}
        self._stackable: dict[str, list[Any]] = {}
        self._lock = threading.Lock()

    @property
    def configuration(self) -> Mapping[str, Any]:
        return self.config.configuration

    @property
    def validator_registry(self) -> ValidatorRegistry:
        return self.config.validator_registry

    @property
    def deprecation_warnings(self) -> bool:
        return self.config.deprecation_warnings

    def route_setting(self, key: str, value: Any = _UNSET) -> Any:
        """Read a route setting, or replace it when a value is given."""
        if value is _UNSET:
            return self._settings.get(key)
        with self._lock:
            self._settings[key] = value
        return value

    def namespace_stackable(self, key: str, value: Any = _UNSET) -> list[Any]:
        """Read a stackable setting, or append a value to it.

        Params:
            key: Setting name, e.g. "validations" or "declared_params"
            value: Entry to append; omitted to read

        Returns:
            Copy of the entries stored under key
        """
        with self._lock:
            entries = self._stackable.setdefault(key, [])
            if value is not _UNSET:
                entries.append(value)
            return list(entries)

    def rename_param(self, path: tuple[str, ...], new_name: str) -> None:
        """Record the external name of the parameter at path."""
        with self._lock:
            renamed = dict(self._settings.get("renamed_params") or {})
            renamed[path] = new_name
            self._settings["renamed_params"] = renamed

    def document_attribute(
        self, names: list[dict[str, str]], doc_attrs: Mapping[str, Any]
    ) -> None:
        """Record documentation attributes for each declared name."""
        with self._lock:
            for name in names:
                self.documentation[name["full_name"]] = dict(doc_attrs)

    @property
    def renamed_params(self) -> dict[tuple[str, ...], str]:
        return self.route_setting("renamed_params") or {}

    @property
    def declared_params(self) -> list[Any]:
        """Declared parameter names of every root scope, in declaration order."""
        declared = []
        for entries in self.namespace_stackable("declared_params"):
            declared.extend(entries)
        return declared

    @property
    def validations(self) -> list[ValidatorRegistration]:
        return self.namespace_stackable("validations")

    def params(
        self, block: Callable[["ParamsScope"], Any] | None = None
    ) -> "ParamsScope":
        """
        Declare the parameters of this endpoint.

        Params:
            block: Callable receiving the root scope and declaring parameters
                on it

        Returns:
            The finished root scope
        """
        from paramtree.scope.params_scope import ParamsScope

        scope = ParamsScope(api=self, block=block)
        self.scopes.append(scope)
        return scope

    def build_validators(self) -> list[Validator]:
        """Instantiate every registered validator in registration order."""
        return [registration.build() for registration in self.validations]

    def active_validators(self, request_params: Any) -> list[Validator]:
        """Validators whose scope must be enforced for the given request."""
        return [
            validator
            for validator in self.build_validators()
            if validator.should_run(request_params)
        ]
