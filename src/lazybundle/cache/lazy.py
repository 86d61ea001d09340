"""Memoised, resettable deferred values.

``LazyValue`` computes its result at most once per generation. A failed
computation is not cached, so the next ``get()`` retries from scratch.
``invalidate()`` starts a new generation: a computation that was already
running when the value was invalidated still returns its result to its own
caller, but that result is never stored.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from ..logging import ensure_logging_context_filter

logger = ensure_logging_context_filter(__name__)

V = TypeVar("V")

_MISSING = object()


class LazyValue(Generic[V]):
    """Thread-safe memoised computation with an explicit invalidation hook.

    Parameters
    ----------
    compute : Callable[[], V]
        Zero-argument callable producing the value.
    label : str, optional
        Identifier used in logs and ``repr`` (typically the lookup key).
    """

    def __init__(self, compute: Callable[[], V], *, label: str | None = None) -> None:
        self._compute = compute
        self.label = label
        self._value: object = _MISSING
        self._generation = 0
        # _state_lock guards _value/_generation; _compute_lock serialises
        # computations so concurrent readers converge on a single result.
        self._state_lock = threading.Lock()
        self._compute_lock = threading.Lock()

    def get(self) -> V:
        """Return the memoised value, computing it first if necessary."""
        with self._state_lock:
            if self._value is not _MISSING:
                return self._value  # type: ignore[return-value]

        with self._compute_lock:
            with self._state_lock:
                if self._value is not _MISSING:
                    return self._value  # type: ignore[return-value]
                generation = self._generation

            logger.debug("Computing lazy value %s", self.label)
            value = self._compute()

            with self._state_lock:
                if self._generation == generation:
                    self._value = value
                else:
                    logger.debug("Discarding lazy value %s computed before reset", self.label)
            return value

    def invalidate(self) -> None:
        """Drop the memoised value so the next ``get()`` recomputes it."""
        with self._state_lock:
            self._value = _MISSING
            self._generation += 1

    @property
    def is_computed(self) -> bool:
        """Return True when a value is memoised for the current generation."""
        with self._state_lock:
            return self._value is not _MISSING

    def __repr__(self) -> str:
        state = "computed" if self.is_computed else "pending"
        return f"{type(self).__name__}({self.label!r}, {state})"


__all__ = ["LazyValue"]
