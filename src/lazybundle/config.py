"""Configuration parsing for lazybundle.

Settings come from two places, merged in this order (later wins):

* ``[tool.lazybundle]`` in the working directory's ``pyproject.toml``;
* the ``LAZYBUNDLE_PATH`` and ``LAZYBUNDLE_CACHE`` environment variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple

from .utils.exceptions import ConfigurationError

try:
    import tomllib as _tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as _tomllib  # type: ignore[no-redef]

logger = logging.getLogger(__name__)

_ENABLED_LABELS = {"1", "true", "on", "yes", "enable"}
_DISABLED_LABELS = {"0", "false", "off", "no", "disable"}


def read_pyproject_section(path: Sequence[str]) -> Dict[str, Any]:
    """Return a mapping from the requested ``pyproject.toml`` section.

    Parameters
    ----------
    path : Sequence[str]
        Nested keys to traverse, e.g. ``("tool", "lazybundle", "logging")``.

    Returns
    -------
    Dict[str, Any]
        The requested table, or an empty dict if the file does not exist,
        cannot be parsed, or lacks the section.
    """
    candidate = Path.cwd() / "pyproject.toml"
    if not candidate.exists():
        return {}
    try:
        with candidate.open("rb") as fh:
            data = _tomllib.load(fh)
    except (OSError, _tomllib.TOMLDecodeError) as exc:
        logger.debug("Ignoring unreadable %s: %s", candidate, exc)
        return {}

    cursor: Any = data
    for key in path:
        if isinstance(cursor, dict) and key in cursor:
            cursor = cursor[key]
        else:
            return {}
    if isinstance(cursor, dict):
        return dict(cursor)
    return {}


def split_paths(value: str | None) -> Tuple[str, ...]:
    """Split an ``os.pathsep``-separated string into non-empty entries."""
    if not value:
        return ()
    return tuple(entry.strip() for entry in value.split(os.pathsep) if entry.strip())


def _parse_int(token: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"{token} must be an integer, got {value!r}",
            details={"param": token, "value": value},
        ) from exc


def _parse_float(token: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"{token} must be a number, got {value!r}",
            details={"param": token, "value": value},
        ) from exc


@dataclass(frozen=True)
class BundleConfig:
    """Settings for the default TOML-backed bundle source.

    Parameters
    ----------
    search_paths : tuple of str
        Directories searched, in order, for ``<package path>/<Name>.toml``.
    package_resources : bool
        Whether to fall back to resources shipped inside importable packages.
    max_items : int
        Maximum number of parsed bundle files kept in memory.
    ttl_seconds : float | None
        Optional time-to-live for parsed bundle files. ``None`` keeps them
        until the owning wrapper is reset.
    """

    search_paths: Tuple[str, ...] = ()
    package_resources: bool = True
    max_items: int = 128
    ttl_seconds: float | None = None

    @classmethod
    def from_pyproject(cls, base: "BundleConfig | None" = None) -> "BundleConfig":
        """Merge ``[tool.lazybundle]`` settings with ``base`` defaults."""
        cfg = base if base is not None else cls()
        section = read_pyproject_section(("tool", "lazybundle"))
        if not section:
            return cfg
        changes: Dict[str, Any] = {}
        paths = section.get("search_paths")
        if isinstance(paths, str):
            changes["search_paths"] = split_paths(paths)
        elif isinstance(paths, (list, tuple)):
            changes["search_paths"] = tuple(str(p) for p in paths)
        if "package_resources" in section:
            changes["package_resources"] = bool(section["package_resources"])
        if "max_items" in section:
            changes["max_items"] = max(1, _parse_int("max_items", section["max_items"]))
        if "ttl" in section:
            changes["ttl_seconds"] = max(0.0, _parse_float("ttl", section["ttl"]))
        return replace(cfg, **changes)

    @classmethod
    def from_env(cls, base: "BundleConfig | None" = None) -> "BundleConfig":
        """Merge ``LAZYBUNDLE_PATH`` and ``LAZYBUNDLE_CACHE`` overrides with ``base``."""
        cfg = base if base is not None else cls()
        changes: Dict[str, Any] = {}

        extra_paths = split_paths(os.getenv("LAZYBUNDLE_PATH"))
        if extra_paths:
            changes["search_paths"] = extra_paths + cfg.search_paths

        raw = os.getenv("LAZYBUNDLE_CACHE")
        tokens = [segment.strip() for segment in (raw or "").split(",") if segment.strip()]
        for token in tokens:
            if token.startswith("max_items="):
                changes["max_items"] = max(1, _parse_int("max_items", token.split("=", 1)[1]))
                continue
            if token.startswith("ttl="):
                changes["ttl_seconds"] = max(0.0, _parse_float("ttl", token.split("=", 1)[1]))
                continue
            if token.startswith("resources="):
                flag = token.split("=", 1)[1].lower()
                if flag in _ENABLED_LABELS:
                    changes["package_resources"] = True
                elif flag in _DISABLED_LABELS:
                    changes["package_resources"] = False
                else:
                    raise ConfigurationError(
                        f"resources must be on or off, got {flag!r}",
                        details={"param": "resources", "value": flag},
                    )
                continue
            logger.warning("Ignoring unknown LAZYBUNDLE_CACHE token %r", token)
        return replace(cfg, **changes) if changes else cfg

    @classmethod
    def load(cls) -> "BundleConfig":
        """Return the effective configuration: pyproject first, then env."""
        return cls.from_env(cls.from_pyproject())


__all__ = ["BundleConfig", "read_pyproject_section", "split_paths"]
