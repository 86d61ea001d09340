"""
lazybundle.

Lazily loaded, memoising key-value bundles and enumerated-type name
resolution, each served from a process-wide registry keyed by identity
(bundle name or enumerated type).
"""

import importlib
import logging as _logging

from .logging import ensure_logging_context_filter

# Provide a default no-op handler to avoid "No handler" warnings for library users.
_logging.getLogger(__name__).addHandler(_logging.NullHandler())
ensure_logging_context_filter(__name__)

__version__ = "v0.1.0"

__all__ = [
    "BundleConfig",
    "BundleRegistry",
    "BundleWrapper",
    "EnumRegistry",
    "EnumWrapper",
    "LazyValue",
    "for_class",
    "for_enum",
    "for_name",
]

_NAME_TO_MODULE = {
    "BundleConfig": ("config", "BundleConfig"),
    "BundleRegistry": ("bundles", "BundleRegistry"),
    "BundleWrapper": ("bundles", "BundleWrapper"),
    "EnumRegistry": ("enums", "EnumRegistry"),
    "EnumWrapper": ("enums", "EnumWrapper"),
    "LazyValue": ("cache", "LazyValue"),
    "for_class": ("bundles", "for_class"),
    "for_enum": ("enums", "for_enum"),
    "for_name": ("bundles", "for_name"),
}


def __getattr__(name: str):
    """Lazily expose the public API from the package root."""
    if name not in _NAME_TO_MODULE:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_name, attr_name = _NAME_TO_MODULE[name]
    module = importlib.import_module(f"{__name__}.{module_name}")
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
