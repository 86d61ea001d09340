"""Lazily loaded key-value bundles with memoised typed lookups."""

from __future__ import annotations

from .registry import BundleRegistry, class_bundle_name, for_class, for_name, get_default_registry
from .sources import BundleHandle, BundleSource, MappingBundleSource, TomlBundleSource
from .wrapper import BundleWrapper, enum_value_key, placeholder

__all__ = [
    "BundleHandle",
    "BundleRegistry",
    "BundleSource",
    "BundleWrapper",
    "MappingBundleSource",
    "TomlBundleSource",
    "class_bundle_name",
    "enum_value_key",
    "for_class",
    "for_name",
    "get_default_registry",
    "placeholder",
]
