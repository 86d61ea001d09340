"""Shared helpers for lazybundle."""

from .exceptions import (
    BundlePropertyError,
    ConfigurationError,
    EnumError,
    InvalidEnumError,
    InvalidEnumTypeError,
    KeyNotFoundError,
    LazyBundleError,
    NumberFormatError,
    SourceUnavailableError,
    SynonymCollisionError,
    ValueFormatError,
    explain_exception,
)
from .introspection import field_summary

__all__ = [
    "BundlePropertyError",
    "ConfigurationError",
    "EnumError",
    "InvalidEnumError",
    "InvalidEnumTypeError",
    "KeyNotFoundError",
    "LazyBundleError",
    "NumberFormatError",
    "SourceUnavailableError",
    "SynonymCollisionError",
    "ValueFormatError",
    "explain_exception",
    "field_summary",
]
