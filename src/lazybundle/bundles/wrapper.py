"""Bundle wrapper: raw string lookups plus memoised typed values.

The backing handle is obtained on the first lookup, not at construction, so
creating a wrapper never fails because its source is missing. Raw strings are
fetched from the handle on every call; only parsed typed values are memoised,
one :class:`~lazybundle.cache.LazyValue` per key and type. ``reset()`` drops
the handle and invalidates every memoised value without discarding the
per-key slots, so accessors handed out earlier stay valid.
"""

from __future__ import annotations

import logging
import re
import threading
from functools import partial
from typing import Any, Callable, Dict, Mapping, Tuple, Type

from ..cache.lazy import LazyValue
from ..enums.introspection import canonical_name, declaring_type_name
from ..logging import (
    ensure_logging_context_filter,
    logging_context,
    placeholder_warnings_enabled,
)
from ..utils.exceptions import (
    KeyNotFoundError,
    NumberFormatError,
    SourceUnavailableError,
    ValueFormatError,
)
from .sources import BundleHandle, BundleSource

logger = ensure_logging_context_filter(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_TRUE_TOKENS = frozenset({"true", "yes", "on", "1"})
_FALSE_TOKENS = frozenset({"false", "no", "off", "0"})


def _parse_integer(text: str) -> int:
    if _INTEGER_RE.fullmatch(text) is None:
        raise ValueError(f"invalid literal for base-10 integer: {text!r}")
    return int(text)


def _parse_boolean(text: str) -> bool:
    token = text.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError(f"invalid boolean token: {text!r}")


# type label -> (parser, error raised when the parser rejects the text)
_PARSERS: Mapping[str, Tuple[Callable[[str], Any], Type[ValueFormatError]]] = {
    "integer": (_parse_integer, NumberFormatError),
    "float": (float, ValueFormatError),
    "boolean": (_parse_boolean, ValueFormatError),
}


def enum_value_key(enum_value: Any, key: str) -> str:
    """Build the composite key ``<TypeName>.<ValueName>.<key>``.

    >>> import enum
    >>> class Shape(enum.Enum):
    ...     SQUARE = 1
    >>> enum_value_key(Shape.SQUARE, "sides")
    'Shape.SQUARE.sides'
    """
    return f"{declaring_type_name(enum_value)}.{canonical_name(enum_value)}.{key}"


def placeholder(key: str) -> str:
    """Return the fallback string used when ``key`` cannot be resolved."""
    return f"[{key}]"


class BundleWrapper:
    """Lazy accessor for a single named bundle.

    Instances are normally obtained from a
    :class:`~lazybundle.bundles.registry.BundleRegistry`, which guarantees a
    single wrapper per bundle name.

    Parameters
    ----------
    name : str
        Bundle identity, e.g. ``"myapp.Settings"``.
    source : BundleSource
        Backing key-value source the bundle is read from.
    """

    placeholder = staticmethod(placeholder)

    def __init__(self, name: str, source: BundleSource) -> None:
        self._name = name
        self._source = source
        self._handle: BundleHandle | None = None
        self._lock = threading.RLock()
        self._getters: Dict[str, Dict[str, LazyValue[Any]]] = {label: {} for label in _PARSERS}

    @property
    def name(self) -> str:
        """Return the bundle identity."""
        return self._name

    # ------------------------------------------------------------------
    # Raw strings
    # ------------------------------------------------------------------
    def get_string_value(self, key: str) -> str:
        """Return the raw string stored under ``key``.

        Raises
        ------
        SourceUnavailableError
            If the backing bundle cannot be loaded.
        KeyNotFoundError
            If the bundle has no value for ``key``.
        """
        with logging_context(bundle_name=self._name, lookup_key=key):
            handle = self._acquire_handle(key)
            value = handle.get(key)
            if value is None:
                raise KeyNotFoundError(self._name, key)
            return value

    def get_string_value_optional(self, key: str) -> str:
        """Return the raw string for ``key`` or ``"[key]"`` if it cannot be resolved."""
        try:
            return self.get_string_value(key)
        except (SourceUnavailableError, KeyNotFoundError) as exc:
            level = logging.WARNING if placeholder_warnings_enabled() else logging.DEBUG
            with logging_context(bundle_name=self._name, lookup_key=key):
                logger.log(level, "Using placeholder for %s in %s: %s", key, self._name, exc)
            return placeholder(key)

    # ------------------------------------------------------------------
    # Typed values
    # ------------------------------------------------------------------
    def get_integer(self, key: Any, sub_key: str | None = None) -> LazyValue[int]:
        """Return the memoised integer accessor for ``key``.

        With ``sub_key``, ``key`` is an enum value and the lookup key becomes
        ``enum_value_key(key, sub_key)``. Lookup and parse failures surface
        from the accessor's ``get()``, never from this call.
        """
        return self._getter("integer", self._resolve_key(key, sub_key))

    def get_float(self, key: Any, sub_key: str | None = None) -> LazyValue[float]:
        """Return the memoised float accessor for ``key`` (see :meth:`get_integer`)."""
        return self._getter("float", self._resolve_key(key, sub_key))

    def get_boolean(self, key: Any, sub_key: str | None = None) -> LazyValue[bool]:
        """Return the memoised boolean accessor for ``key`` (see :meth:`get_integer`).

        Accepts ``true/yes/on/1`` and ``false/no/off/0`` in any case.
        """
        return self._getter("boolean", self._resolve_key(key, sub_key))

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Drop the backing handle and invalidate every memoised value."""
        with self._lock:
            self._handle = None
            getters = [getter for slots in self._getters.values() for getter in slots.values()]
        self._source.invalidate(self._name)
        for getter in getters:
            getter.invalidate()
        with logging_context(bundle_name=self._name):
            logger.debug("Reset bundle %s (%d cached values invalidated)", self._name, len(getters))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------
    def _acquire_handle(self, key: str) -> BundleHandle:
        with self._lock:
            if self._handle is None:
                if not self._source.is_available(self._name):
                    raise SourceUnavailableError(self._name, key)
                self._handle = self._source.open(self._name)
                logger.debug("Opened bundle %s", self._name)
            return self._handle

    @staticmethod
    def _resolve_key(key: Any, sub_key: str | None) -> str:
        if sub_key is not None:
            return enum_value_key(key, sub_key)
        if not isinstance(key, str):
            raise TypeError(f"key must be a string when no sub_key is given, got {key!r}")
        return key

    def _getter(self, type_label: str, key: str) -> LazyValue[Any]:
        with self._lock:
            slots = self._getters[type_label]
            getter = slots.get(key)
            if getter is None:
                getter = LazyValue(partial(self._parse, type_label, key), label=key)
                slots[key] = getter
            return getter

    def _parse(self, type_label: str, key: str) -> Any:
        text = self.get_string_value(key)
        parser, error_cls = _PARSERS[type_label]
        try:
            return parser(text)
        except ValueError as exc:
            raise error_cls(self._name, key, text, type_label=type_label) from exc


__all__ = ["BundleWrapper", "enum_value_key", "placeholder"]
