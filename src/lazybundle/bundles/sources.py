"""Backing key-value sources for bundle wrappers.

A source answers two questions for a bundle name: is the bundle available,
and what string (if any) does it hold for a key. ``BundleWrapper`` only talks
to the abstract :class:`BundleSource` interface; two implementations ship with
the package:

* :class:`MappingBundleSource` reads live in-memory mappings.
* :class:`TomlBundleSource` reads ``<Name>.toml`` files from search paths or
  package resources and keeps parsed files in a ``cachetools`` cache until the
  owning wrapper is reset.
"""

from __future__ import annotations

import abc
import datetime
import importlib.resources
import importlib.util
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Tuple

import cachetools

from ..logging import ensure_logging_context_filter
from ..utils.exceptions import ConfigurationError, SourceUnavailableError

try:
    import tomllib as _tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as _tomllib  # type: ignore[no-redef]

logger = ensure_logging_context_filter(__name__)


class BundleSource(abc.ABC):
    """Abstract key to string lookup over named bundles."""

    @abc.abstractmethod
    def is_available(self, name: str) -> bool:
        """Return True when the bundle ``name`` can be read."""

    @abc.abstractmethod
    def lookup(self, name: str, key: str) -> str | None:
        """Return the value of ``key`` in bundle ``name``, or ``None`` if absent.

        Raises
        ------
        SourceUnavailableError
            If the bundle itself cannot be read.
        """

    def open(self, name: str) -> "BundleHandle":
        """Return a handle bound to bundle ``name``.

        Availability is not checked here; callers consult ``is_available``
        first so they can report the key they were resolving.
        """
        return BundleHandle(self, name)

    def invalidate(self, name: str | None = None) -> None:
        """Drop raw data cached for ``name`` (every bundle when ``None``)."""


class BundleHandle:
    """A source bound to one bundle name."""

    __slots__ = ("source", "name")

    def __init__(self, source: BundleSource, name: str) -> None:
        self.source = source
        self.name = name

    def get(self, key: str) -> str | None:
        """Return the raw value of ``key`` or ``None`` when it is absent."""
        return self.source.lookup(self.name, key)

    def __repr__(self) -> str:
        return f"BundleHandle({self.name!r}, {type(self.source).__name__})"


class MappingBundleSource(BundleSource):
    """Source backed by in-memory mappings of bundle name to key/value pairs.

    The mappings are read live on every lookup, so callers may mutate them to
    change what subsequent lookups observe. Values are converted with ``str``.
    """

    def __init__(self, bundles: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self.bundles: Dict[str, Mapping[str, Any]] = dict(bundles or {})

    def is_available(self, name: str) -> bool:
        return name in self.bundles

    def lookup(self, name: str, key: str) -> str | None:
        bundle = self.bundles.get(name)
        if bundle is None:
            raise SourceUnavailableError(name, key)
        value = bundle.get(key)
        return None if value is None else str(value)


def _scalar_to_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, list):
        return ",".join(_scalar_to_string(item) for item in value)
    return str(value)


def flatten_table(table: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten nested TOML tables into dotted keys with string values.

    >>> flatten_table({"Shape": {"SQUARE": {"sides": 4}}, "debug": True})
    {'Shape.SQUARE.sides': '4', 'debug': 'true'}
    """
    flat: Dict[str, str] = {}
    for key, value in table.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_table(value, full_key))
        else:
            flat[full_key] = _scalar_to_string(value)
    return flat


class TomlBundleSource(BundleSource):
    """Source reading bundles from ``.toml`` files.

    The bundle name ``a.b.Thing`` resolves to ``a/b/Thing.toml`` under each
    entry of ``search_paths`` in order. When no file matches and
    ``package_resources`` is enabled, the resource ``Thing.toml`` inside the
    importable package ``a.b`` is used instead (for a plain module, its
    parent package).

    Parameters
    ----------
    search_paths : Iterable[str | Path]
        Directories searched for bundle files.
    package_resources : bool
        Fall back to package resources.
    max_items : int
        Maximum number of parsed bundles held in memory.
    ttl_seconds : float | None
        Optional expiry for parsed bundles.
    """

    def __init__(
        self,
        search_paths: Iterable[str | Path] = (),
        *,
        package_resources: bool = True,
        max_items: int = 128,
        ttl_seconds: float | None = None,
    ) -> None:
        if max_items <= 0:
            raise ConfigurationError(
                "max_items must be positive",
                details={"param": "max_items", "value": max_items, "requirement": "positive"},
            )
        self.search_paths: Tuple[Path, ...] = tuple(Path(p) for p in search_paths)
        self.package_resources = package_resources
        if ttl_seconds is not None:
            self._store: cachetools.Cache = cachetools.TTLCache(
                maxsize=max_items, ttl=ttl_seconds
            )
        else:
            self._store = cachetools.LRUCache(maxsize=max_items)
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: Any) -> "TomlBundleSource":
        """Build a source from a :class:`~lazybundle.config.BundleConfig`."""
        return cls(
            config.search_paths,
            package_resources=config.package_resources,
            max_items=config.max_items,
            ttl_seconds=config.ttl_seconds,
        )

    # ------------------------------------------------------------------
    # BundleSource API
    # ------------------------------------------------------------------
    def is_available(self, name: str) -> bool:
        return self._load(name) is not None

    def lookup(self, name: str, key: str) -> str | None:
        data = self._load(name)
        if data is None:
            raise SourceUnavailableError(name, key)
        return data.get(key)

    def invalidate(self, name: str | None = None) -> None:
        with self._lock:
            if name is None:
                self._store.clear()
            else:
                self._store.pop(name, None)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------
    def _load(self, name: str) -> Mapping[str, str] | None:
        with self._lock:
            cached = self._store.get(name)
            if cached is not None:
                return cached
            raw = self._read(name)
            if raw is None:
                return None
            try:
                data = flatten_table(_tomllib.loads(raw.decode("utf-8")))
            except (UnicodeDecodeError, _tomllib.TOMLDecodeError) as exc:
                logger.warning("Bundle %s could not be parsed: %s", name, exc)
                return None
            self._store[name] = data
            logger.debug("Loaded bundle %s (%d keys)", name, len(data))
            return data

    def _read(self, name: str) -> bytes | None:
        parts = name.split(".")
        filename = f"{parts[-1]}.toml"
        relative = Path(*parts[:-1], filename)
        for root in self.search_paths:
            candidate = root / relative
            if candidate.is_file():
                return candidate.read_bytes()
        if self.package_resources and len(parts) > 1:
            return self._read_resource(".".join(parts[:-1]), filename)
        return None

    @staticmethod
    def _read_resource(module_name: str, filename: str) -> bytes | None:
        try:
            spec = importlib.util.find_spec(module_name)
        except (ImportError, ValueError):
            return None
        if spec is None:
            return None
        package = module_name if spec.submodule_search_locations is not None else spec.parent
        if not package:
            return None
        resource = importlib.resources.files(package) / filename
        if not resource.is_file():
            return None
        return resource.read_bytes()


__all__ = [
    "BundleHandle",
    "BundleSource",
    "MappingBundleSource",
    "TomlBundleSource",
    "flatten_table",
]
