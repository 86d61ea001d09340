"""Process-wide registry of bundle wrappers.

A registry maps bundle names to :class:`BundleWrapper` instances and creates
each wrapper on first request. Entries are never evicted, so the same name
always yields the same wrapper for the life of the registry.

The module-level :func:`for_name` and :func:`for_class` helpers use a default
registry built on first use from :meth:`BundleConfig.load`.
"""

from __future__ import annotations

import threading
from typing import Dict, Tuple

from ..config import BundleConfig
from ..logging import ensure_logging_context_filter
from .sources import BundleSource, TomlBundleSource
from .wrapper import BundleWrapper

logger = ensure_logging_context_filter(__name__)


def class_bundle_name(cls: type) -> str:
    """Return the bundle name for ``cls``: ``<module>.<qualified name>``."""
    return f"{cls.__module__}.{cls.__qualname__}"


class BundleRegistry:
    """Thread-safe name to :class:`BundleWrapper` map populated on demand."""

    def __init__(self, source: BundleSource) -> None:
        self._source = source
        self._wrappers: Dict[str, BundleWrapper] = {}
        self._lock = threading.RLock()

    @property
    def source(self) -> BundleSource:
        """Return the backing source shared by every wrapper in this registry."""
        return self._source

    def for_name(self, name: str) -> BundleWrapper:
        """Return the unique wrapper for bundle ``name``, creating it if needed."""
        wrapper = self._wrappers.get(name)
        if wrapper is not None:
            return wrapper
        with self._lock:
            wrapper = self._wrappers.get(name)
            if wrapper is None:
                wrapper = BundleWrapper(name, self._source)
                self._wrappers[name] = wrapper
                logger.debug("Registered bundle wrapper %s", name)
            return wrapper

    def for_class(self, cls: type) -> BundleWrapper:
        """Return the wrapper for the bundle named after ``cls``.

        ``for_class(C)`` and ``for_name(class_bundle_name(C))`` return the
        same instance.
        """
        return self.for_name(class_bundle_name(cls))

    def names(self) -> Tuple[str, ...]:
        """Return the names of every wrapper created so far."""
        with self._lock:
            return tuple(self._wrappers)

    def __contains__(self, name: object) -> bool:
        return name in self._wrappers

    def __len__(self) -> int:
        return len(self._wrappers)


_DEFAULT_REGISTRY: BundleRegistry | None = None
_DEFAULT_LOCK = threading.Lock()


def get_default_registry() -> BundleRegistry:
    """Return the process-wide registry, building it on first use."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is not None:
        return _DEFAULT_REGISTRY
    with _DEFAULT_LOCK:
        if _DEFAULT_REGISTRY is None:
            config = BundleConfig.load()
            logger.debug("Creating default bundle registry with %s", config)
            _DEFAULT_REGISTRY = BundleRegistry(TomlBundleSource.from_config(config))
        return _DEFAULT_REGISTRY


def for_name(name: str) -> BundleWrapper:
    """Return the default registry's wrapper for ``name``."""
    return get_default_registry().for_name(name)


def for_class(cls: type) -> BundleWrapper:
    """Return the default registry's wrapper for the bundle named after ``cls``."""
    return get_default_registry().for_class(cls)


__all__ = [
    "BundleRegistry",
    "class_bundle_name",
    "for_class",
    "for_name",
    "get_default_registry",
]
