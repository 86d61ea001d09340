"""Message catalog for lazybundle.

Message text lives in the ``Messages.toml`` resource shipped with the
package and is read through the default bundle registry. A
``lazybundle/Messages.toml`` under a configured search path overrides it key
by key: keys the override does not define still come from the packaged
resource. Unknown keys resolve to the placeholder ``"[key]"``.

Lookups never raise. When the default registry cannot be built (for example
because of a malformed ``LAZYBUNDLE_CACHE``), the packaged resource is read
directly so error messages stay available to the code reporting errors.
"""

from __future__ import annotations

import functools

from .logging import ensure_logging_context_filter

logger = ensure_logging_context_filter(__name__)

BUNDLE_NAME = "lazybundle.Messages"


def bundle():
    """Return the bundle wrapper backing the catalog."""
    from .bundles.registry import for_name

    return for_name(BUNDLE_NAME)


@functools.lru_cache(maxsize=None)
def packaged_bundle():
    """Return a wrapper reading only the packaged ``Messages.toml``."""
    from .bundles.sources import TomlBundleSource
    from .bundles.wrapper import BundleWrapper

    return BundleWrapper(BUNDLE_NAME, TomlBundleSource(package_resources=True))


def get(key: str) -> str:
    """Return the message for ``key``, or ``"[key]"`` if it is not defined."""
    from .utils.exceptions import KeyNotFoundError, LazyBundleError, SourceUnavailableError

    try:
        catalog = bundle()
    except LazyBundleError as exc:
        logger.debug("Message catalog unavailable, reading packaged messages: %s", exc)
        return packaged_bundle().get_string_value_optional(key)
    try:
        return catalog.get_string_value(key)
    except (SourceUnavailableError, KeyNotFoundError):
        return packaged_bundle().get_string_value_optional(key)


__all__ = ["BUNDLE_NAME", "bundle", "get", "packaged_bundle"]
