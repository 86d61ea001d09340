"""Alias table resolving free-form strings to values of an enumerated type.

The table is built in two ordered passes over the values:

1. For each value, its upper-cased name and its upper-cased name without
   underscores are inserted only if not already present, so the earliest
   value claims a derived alias shared by several values.
2. Each value's exact canonical name is inserted unconditionally, so an exact
   name is never shadowed by another value's derived alias.

User synonyms are added afterwards with :meth:`EnumWrapper.set_synonym`, which
never overwrites an existing alias.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Dict, Generic, Mapping, Tuple, TypeVar

from ..logging import ensure_logging_context_filter, logging_context
from ..messages import get as get_message
from ..utils.exceptions import InvalidEnumError, SynonymCollisionError
from .introspection import all_values, canonical_name

logger = ensure_logging_context_filter(__name__)

E = TypeVar("E")


class EnumWrapper(Generic[E]):
    """Name resolution for one enumerated type.

    Obtain instances through :class:`~lazybundle.enums.registry.EnumRegistry`
    so every type shares a single alias table.

    Raises
    ------
    InvalidEnumTypeError
        If ``enum_type`` is not enumerable.
    """

    def __init__(self, enum_type: type) -> None:
        values = all_values(enum_type)
        self._enum_type = enum_type
        self._values: Tuple[E, ...] = values
        self._aliases: Dict[str, E] = {}
        self._lock = threading.Lock()

        for value in values:
            name = canonical_name(value)
            self._aliases.setdefault(name.upper(), value)
            unspaced = name.replace("_", "")
            if unspaced != name:
                self._aliases.setdefault(unspaced.upper(), value)

        for value in values:
            self._aliases[canonical_name(value)] = value

        logger.debug(
            "Built alias table for %s: %d values, %d aliases",
            enum_type.__name__,
            len(values),
            len(self._aliases),
        )

    @property
    def enum_type(self) -> type:
        """Return the wrapped enumerated type."""
        return self._enum_type

    @property
    def aliases(self) -> Mapping[str, E]:
        """Return a read-only view of the alias table."""
        return MappingProxyType(self._aliases)

    def values(self) -> Tuple[E, ...]:
        """Return every value of the wrapped type in enumeration order."""
        return self._values

    def value_of(self, name: str) -> E:
        """Resolve ``name`` by exact alias, then by its upper-cased form.

        Raises
        ------
        InvalidEnumError
            If neither form is a known alias.
        """
        aliases = self._aliases
        if name in aliases:
            return aliases[name]
        upper = name.upper()
        if upper in aliases:
            return aliases[upper]
        raise InvalidEnumError(
            f"{get_message('INVALID_ENUM')}{name!r} for {self._enum_type.__name__}",
            self._enum_type,
            name,
        )

    def set_synonym(self, alias: str, value: E) -> None:
        """Bind ``alias`` to ``value`` unless the alias is already bound.

        Synonyms match exactly; ``value_of`` only adds its upper-case retry.

        Raises
        ------
        SynonymCollisionError
            If ``alias`` already resolves to a value. The table is unchanged.
        InvalidEnumError
            If ``value`` is not a value of the wrapped type.
        """
        if value not in self._values:
            raise InvalidEnumError(
                f"{get_message('INVALID_ENUM')}{value!r} for {self._enum_type.__name__}",
                self._enum_type,
                str(value),
            )
        with self._lock:
            if alias in self._aliases:
                existing = self._aliases[alias]
                raise SynonymCollisionError(
                    f"{get_message('EnumWrapper.SYNONYM_ALREADY_EXISTS')}{alias} -> {existing}",
                    self._enum_type,
                    alias,
                    existing,
                )
            self._aliases[alias] = value
        with logging_context(enum_type=self._enum_type.__name__, alias=alias):
            logger.debug("Registered synonym %s -> %s", alias, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._enum_type.__name__})"


__all__ = ["EnumWrapper"]
