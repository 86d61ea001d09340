"""Process-wide registry of enum wrappers, keyed by enumerated type."""

from __future__ import annotations

import threading
from typing import Any, Dict, Tuple

from ..logging import ensure_logging_context_filter
from .introspection import ensure_enumerable
from .wrapper import EnumWrapper

logger = ensure_logging_context_filter(__name__)


class EnumRegistry:
    """Thread-safe type to :class:`EnumWrapper` map populated on demand."""

    def __init__(self) -> None:
        self._wrappers: Dict[Any, EnumWrapper[Any]] = {}
        self._lock = threading.RLock()

    def for_type(self, enum_type: type) -> EnumWrapper[Any]:
        """Return the unique wrapper for ``enum_type``, creating it if needed.

        Raises
        ------
        InvalidEnumTypeError
            If ``enum_type`` is not enumerable. Nothing is registered.
        """
        ensure_enumerable(enum_type)
        wrapper = self._wrappers.get(enum_type)
        if wrapper is not None:
            return wrapper
        with self._lock:
            wrapper = self._wrappers.get(enum_type)
            if wrapper is None:
                wrapper = EnumWrapper(enum_type)
                self._wrappers[enum_type] = wrapper
                logger.debug("Registered enum wrapper for %s", enum_type.__name__)
            return wrapper

    def types(self) -> Tuple[type, ...]:
        """Return every type wrapped so far."""
        with self._lock:
            return tuple(self._wrappers)

    def __contains__(self, enum_type: object) -> bool:
        try:
            return enum_type in self._wrappers
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._wrappers)


_DEFAULT_REGISTRY = EnumRegistry()


def get_default_registry() -> EnumRegistry:
    """Return the process-wide enum registry."""
    return _DEFAULT_REGISTRY


def for_enum(enum_type: type) -> EnumWrapper[Any]:
    """Return the default registry's wrapper for ``enum_type``."""
    return _DEFAULT_REGISTRY.for_type(enum_type)


__all__ = ["EnumRegistry", "for_enum", "get_default_registry"]
