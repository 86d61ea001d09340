"""Custom exception hierarchy for lazybundle.

Every failure raised by the bundle and enum layers derives from
``LazyBundleError`` and carries a structured ``details`` payload so callers
can inspect the offending bundle, key or alias without parsing messages.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "LazyBundleError",
    "ConfigurationError",
    "BundlePropertyError",
    "SourceUnavailableError",
    "KeyNotFoundError",
    "ValueFormatError",
    "NumberFormatError",
    "EnumError",
    "InvalidEnumError",
    "InvalidEnumTypeError",
    "SynonymCollisionError",
    "explain_exception",
]

FAILED_TO_RETRIEVE_KEY = "Failed to retrieve key from bundle "
BECAUSE_BUNDLE_NOT_LOADED = "bundle could not be loaded"
BECAUSE_KEY_NOT_FOUND = "key not found"


class LazyBundleError(Exception):
    """Base class for library-specific errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Attach structured error details alongside the user-facing message."""
        super().__init__(message)
        self.details: dict[str, Any] | None = details

    def __repr__(self) -> str:  # pragma: no cover - repr stability check in tests
        """Return the exception representation with the message payload."""
        cls = self.__class__.__name__
        return f"{cls}({super().__str__()!r})"


class ConfigurationError(LazyBundleError):
    """Invalid configuration value in the environment or pyproject.toml."""


class BundlePropertyError(LazyBundleError):
    """A bundle property was requested but its value could not be resolved."""

    def __init__(
        self,
        bundle_name: str,
        key: str,
        reason: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Format the message as ``<prefix><bundle>, <key>: <reason>``."""
        payload = {"bundle": bundle_name, "key": key}
        if details:
            payload.update(details)
        super().__init__(
            f"{FAILED_TO_RETRIEVE_KEY}{bundle_name}, {key}: {reason}", details=payload
        )
        self.bundle_name = bundle_name
        self.key = key


class SourceUnavailableError(BundlePropertyError):
    """The backing source for a bundle is missing or unreachable."""

    def __init__(self, bundle_name: str, key: str) -> None:
        super().__init__(bundle_name, key, BECAUSE_BUNDLE_NOT_LOADED)


class KeyNotFoundError(BundlePropertyError):
    """The backing source is reachable but holds no value for the key."""

    def __init__(self, bundle_name: str, key: str) -> None:
        super().__init__(bundle_name, key, BECAUSE_KEY_NOT_FOUND)


class ValueFormatError(BundlePropertyError, ValueError):
    """A raw string value could not be parsed into the requested type."""

    type_label = "value"

    def __init__(
        self, bundle_name: str, key: str, text: str, *, type_label: str | None = None
    ) -> None:
        label = type_label or self.type_label
        super().__init__(
            bundle_name,
            key,
            f"value could not be parsed as {label}: {text!r}",
            details={"text": text, "type": label},
        )
        self.text = text
        self.type_label = label


class NumberFormatError(ValueFormatError):
    """A raw string value is not a valid base-10 integer."""

    type_label = "integer"


class EnumError(LazyBundleError):
    """Base class for failures raised by enum wrappers and registries."""

    def __init__(
        self, message: str, enum_type: Any, *, details: dict[str, Any] | None = None
    ) -> None:
        payload = {"enum_type": getattr(enum_type, "__name__", repr(enum_type))}
        if details:
            payload.update(details)
        super().__init__(message, details=payload)
        self.enum_type = enum_type


class InvalidEnumError(EnumError, ValueError):
    """A string could not be resolved to a value of the enumerated type."""

    def __init__(self, message: str, enum_type: Any, name: str) -> None:
        super().__init__(message, enum_type, details={"name": name})
        self.name = name


class InvalidEnumTypeError(EnumError, TypeError):
    """A non-enumerable type was passed where an enumerated type was required."""


class SynonymCollisionError(EnumError, ValueError):
    """A synonym was declared for an alias that is already bound."""

    def __init__(self, message: str, enum_type: Any, alias: str, existing: Any) -> None:
        super().__init__(message, enum_type, details={"alias": alias, "existing": existing})
        self.alias = alias
        self.existing = existing


def explain_exception(e: Exception) -> str:
    """Return a human-readable multi-line description of an exception.

    Parameters
    ----------
    e : Exception
        The exception to format.

    Returns
    -------
    str
        For ``LazyBundleError`` the class name, message and details dict;
        for anything else ``str(e)``.

    Examples
    --------
    >>> from lazybundle.utils.exceptions import KeyNotFoundError, explain_exception
    >>> print(explain_exception(KeyNotFoundError("app.Settings", "port")))
    KeyNotFoundError: Failed to retrieve key from bundle app.Settings, port: key not found
      Details: {'bundle': 'app.Settings', 'key': 'port'}
    """
    if isinstance(e, LazyBundleError):
        lines = [f"{e.__class__.__name__}: {str(e)}"]
        if e.details is not None:
            lines.append(f"  Details: {e.details}")
        return "\n".join(lines)
    return str(e)
