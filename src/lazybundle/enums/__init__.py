"""Enumerated-type name resolution with synonyms."""

from __future__ import annotations

from .introspection import (
    all_values,
    canonical_name,
    declaring_type_name,
    ensure_enumerable,
    is_enumerable,
    register_enumeration,
)
from .registry import EnumRegistry, for_enum, get_default_registry
from .wrapper import EnumWrapper

__all__ = [
    "EnumRegistry",
    "EnumWrapper",
    "all_values",
    "canonical_name",
    "declaring_type_name",
    "ensure_enumerable",
    "for_enum",
    "get_default_registry",
    "is_enumerable",
    "register_enumeration",
]
