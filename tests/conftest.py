"""Shared pytest fixtures for namewire tests."""

import pytest

from namewire.injection import SignatureInspector
from namewire.injector import Injector
from namewire.registry import Registry


@pytest.fixture()
def registry() -> Registry:
    """Empty registry."""
    return Registry()


@pytest.fixture()
def injector(registry: Registry) -> Injector:
    """Root injector over ``registry``; register lazy services before resolving."""
    return Injector(registry)


@pytest.fixture()
def inspector() -> SignatureInspector:
    """SignatureInspector instance."""
    return SignatureInspector()
