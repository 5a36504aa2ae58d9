"""
Shared test fixtures and utilities for the paramtree test suite.
"""

import pytest

from paramtree import Endpoint, EndpointConfig


@pytest.fixture
def endpoint():
    """Fresh endpoint with default configuration."""
    return Endpoint()


@pytest.fixture
def configured_endpoint():
    """Endpoint exposing user configuration to declarations.

    Usage:
        def test_something(configured_endpoint):
            configured_endpoint.params(
                lambda params: params.requires("x", values=params.configuration["sizes"])
            )
    """
    return Endpoint(
        EndpointConfig.from_dict(
            {"configuration": {"sizes": ["s", "m", "l"], "max_items": 10}}
        )
    )


@pytest.fixture
def registered_kinds(endpoint):
    """Kinds of the validators registered on the endpoint, in order."""

    def _kinds(attribute=None):
        return [
            registration.kind
            for registration in endpoint.validations
            if attribute is None or attribute in registration.attributes
        ]

    return _kinds
