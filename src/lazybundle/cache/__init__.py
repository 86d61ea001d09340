"""Lazy, memoised value holders."""

from __future__ import annotations

from .lazy import LazyValue

__all__ = ["LazyValue"]
