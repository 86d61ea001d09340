"""Structured logging for bundle and enum lookups.

Records emitted by lazybundle carry the bundle, lookup key, enumerated type
and alias being resolved when the record was created. The values live in
context variables set with :func:`logging_context` and are copied onto each
record by :class:`LoggingContextFilter`.

Logger filters only see records created on their own logger, so every module
that logs attaches the filter to its module logger through
:func:`ensure_logging_context_filter`.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
import os
from typing import Any, Dict, Iterator

from .config import read_pyproject_section

# Record attributes always present on lazybundle records (None when unset)
_CONTEXT_KEYS = (
    "bundle_name",
    "lookup_key",
    "enum_type",
    "alias",
)

_context_vars = {key: contextvars.ContextVar(key, default=None) for key in _CONTEXT_KEYS}

_TRUTHY = frozenset({"1", "true", "yes", "on", "enable"})


def coerce_bool(value: str | bool | None) -> bool:
    """Interpret an env or pyproject switch value."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def placeholder_warnings_enabled() -> bool:
    """Return whether a ``"[key]"`` fallback is logged at WARNING instead of DEBUG.

    ``LAZYBUNDLE_WARN_PLACEHOLDERS`` wins over ``warn_placeholders`` in the
    ``[tool.lazybundle.logging]`` table of pyproject.toml.
    """
    env_value = os.environ.get("LAZYBUNDLE_WARN_PLACEHOLDERS")
    if env_value is not None:
        return coerce_bool(env_value)

    section = read_pyproject_section(("tool", "lazybundle", "logging"))
    return coerce_bool(section.get("warn_placeholders")) if section else False


def get_logging_context() -> Dict[str, Any]:
    """Return the lookup fields currently set, omitting unset ones."""
    return {key: var.get() for key, var in _context_vars.items() if var.get() is not None}


def update_logging_context(**fields: Any) -> None:
    """Set lookup fields for the rest of the current context. Unknown names are ignored."""
    for key, value in fields.items():
        var = _context_vars.get(key)
        if var is not None:
            var.set(value)


@contextlib.contextmanager
def logging_context(**fields: Any) -> Iterator[None]:
    """Set lookup fields for the duration of the block.

    >>> with logging_context(bundle_name="app.Settings", lookup_key="port"):
    ...     get_logging_context()["lookup_key"]
    'port'
    """
    tokens = {
        key: _context_vars[key].set(value) for key, value in fields.items() if key in _context_vars
    }
    try:
        yield
    finally:
        for key, token in tokens.items():
            _context_vars[key].reset(token)


class LoggingContextFilter(logging.Filter):
    """Copy the current lookup fields onto every record passing through."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_logging_context()
        for key in _CONTEXT_KEYS:
            setattr(record, key, context.get(key))
        return True


def ensure_logging_context_filter(logger_name: str = "lazybundle") -> logging.Logger:
    """Attach a single :class:`LoggingContextFilter` to ``logger_name`` and return the logger."""
    logger = logging.getLogger(logger_name)
    if not any(isinstance(existing, LoggingContextFilter) for existing in logger.filters):
        logger.addFilter(LoggingContextFilter())
    return logger


# config is imported before this module exists, so its logger is wired here
ensure_logging_context_filter("lazybundle.config")


__all__ = [
    "placeholder_warnings_enabled",
    "get_logging_context",
    "update_logging_context",
    "logging_context",
    "ensure_logging_context_filter",
    "LoggingContextFilter",
    "coerce_bool",
]
