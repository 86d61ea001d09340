"""Shared pytest fixtures for lazybundle tests."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

import pytest

from lazybundle.bundles import BundleRegistry, MappingBundleSource
from lazybundle.enums import EnumRegistry
from lazybundle.logging import update_logging_context


class CountingSource(MappingBundleSource):
    """In-memory source recording every availability check and lookup."""

    def __init__(self, bundles: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        super().__init__(bundles)
        self.lookups: List[Tuple[str, str]] = []
        self.availability_checks: List[str] = []
        self.invalidations: List[str | None] = []

    def is_available(self, name: str) -> bool:
        self.availability_checks.append(name)
        return super().is_available(name)

    def lookup(self, name: str, key: str) -> str | None:
        self.lookups.append((name, key))
        return super().lookup(name, key)

    def invalidate(self, name: str | None = None) -> None:
        self.invalidations.append(name)

    def lookup_count(self, key: str) -> int:
        return sum(1 for _, looked_up in self.lookups if looked_up == key)


@pytest.fixture
def settings_data() -> Dict[str, str]:
    return {
        "mockValue": "256",
        "unparseable": "two-fifty-six",
        "greeting": "hello",
        "ratio": "0.75",
        "enabled": "Yes",
        "MockEnum0123.ONE.weight": "11",
    }


@pytest.fixture
def counting_source(settings_data) -> CountingSource:
    return CountingSource({"app.Settings": settings_data})


@pytest.fixture
def bundle_registry(counting_source) -> BundleRegistry:
    return BundleRegistry(counting_source)


@pytest.fixture
def settings(bundle_registry):
    return bundle_registry.for_name("app.Settings")


@pytest.fixture
def enum_registry() -> EnumRegistry:
    return EnumRegistry()


@pytest.fixture(autouse=True)
def _clear_logging_context():
    yield
    update_logging_context(bundle_name=None, lookup_key=None, enum_type=None, alias=None)
