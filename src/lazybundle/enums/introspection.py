"""Enumerable-type capability used by enum wrappers and composite bundle keys.

Three kinds of types are enumerable:

* ``enum.Enum`` subclasses (values in definition order, aliases excluded);
* types registered with :func:`register_enumeration`;
* types exposing an ``enum_values()`` classmethod.

Canonical names come from the registered ``name`` function, then the value's
``name`` attribute, then ``str(value)``.
"""

from __future__ import annotations

import enum
import threading
from typing import Any, Callable, Dict, Iterable, Tuple

_CUSTOM: Dict[type, Tuple[Callable[[], Iterable[Any]], Callable[[Any], str] | None]] = {}
_CUSTOM_LOCK = threading.Lock()


def register_enumeration(
    enum_type: type,
    values: Callable[[], Iterable[Any]],
    *,
    name: Callable[[Any], str] | None = None,
) -> None:
    """Declare ``enum_type`` enumerable through an explicit listing function.

    Parameters
    ----------
    enum_type : type
        The type whose values are listed.
    values : Callable[[], Iterable]
        Returns every value of the type, in a stable order.
    name : Callable[[value], str], optional
        Returns a value's canonical name. Defaults to the ``name`` attribute.
    """
    with _CUSTOM_LOCK:
        _CUSTOM[enum_type] = (values, name)


def is_enumerable(enum_type: Any) -> bool:
    """Return True when ``enum_type`` can list its values."""
    if not isinstance(enum_type, type):
        return False
    if issubclass(enum_type, enum.Enum) or enum_type in _CUSTOM:
        return True
    return callable(getattr(enum_type, "enum_values", None))


def ensure_enumerable(enum_type: Any) -> None:
    """Raise ``InvalidEnumTypeError`` unless ``enum_type`` is enumerable."""
    if is_enumerable(enum_type):
        return

    from ..messages import get as get_message
    from ..utils.exceptions import InvalidEnumTypeError

    if enum_type is None:
        raise InvalidEnumTypeError(get_message("TYPE_CANNOT_BE_NULL"), enum_type)
    raise InvalidEnumTypeError(
        f"{get_message('EnumWrapper.INVALID_ENUM_TYPE')}{enum_type!r}", enum_type
    )


def all_values(enum_type: type) -> Tuple[Any, ...]:
    """Return every value of ``enum_type`` in enumeration order.

    Raises
    ------
    InvalidEnumTypeError
        If ``enum_type`` is not enumerable.
    """
    ensure_enumerable(enum_type)
    if issubclass(enum_type, enum.Enum):
        return tuple(enum_type)
    custom = _CUSTOM.get(enum_type)
    if custom is not None:
        return tuple(custom[0]())
    return tuple(enum_type.enum_values())


def canonical_name(value: Any) -> str:
    """Return the exact declared name of ``value``."""
    if isinstance(value, enum.Enum):
        return value.name
    custom = _CUSTOM.get(type(value))
    if custom is not None and custom[1] is not None:
        return custom[1](value)
    name = getattr(value, "name", None)
    return name if isinstance(name, str) else str(value)


def declaring_type_name(value: Any) -> str:
    """Return the short name of the type declaring ``value``."""
    return type(value).__name__


__all__ = [
    "all_values",
    "canonical_name",
    "declaring_type_name",
    "ensure_enumerable",
    "is_enumerable",
    "register_enumeration",
]
