"""Small introspection helpers used for diagnostics."""

from __future__ import annotations

import os
from typing import Any

_BULLET = "  - "


def field_summary(obj: Any, *fields: str) -> str:
    """Return a bulleted summary of ``obj`` showing the requested attributes.

    The first line is the class name, followed by one ``"  - name: value"``
    line per field. Attributes that cannot be read show the name of the
    exception raised instead of a value, so the summary never fails.

    Examples
    --------
    >>> class Point:
    ...     x = 1
    >>> print(field_summary(Point(), "x", "y"), end="")
    Point
      - x: 1
      - y: AttributeError
    """
    lines = [type(obj).__name__]
    for name in fields:
        try:
            value = getattr(obj, name)
        except Exception as exc:  # noqa: BLE001 - the failure is the reported value
            value = type(exc).__name__
        lines.append(f"{_BULLET}{name}: {value}")
    return os.linesep.join(lines) + os.linesep


__all__ = ["field_summary"]
