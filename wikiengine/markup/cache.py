# wikiengine/markup/cache.py
"""
Cache hooks for formatted filter output.

Filters that perform expensive per-tag transformations (syntax highlighting,
for example) key their output by ``(kind, digest)`` where ``digest`` is a
content hash of the exact substring being transformed. The hook decides where
entries live; the filter chain itself never reads or writes the cache.

Hooks are injected into the render context. The default hook always misses.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Optional, Protocol, runtime_checkable

from django.core.cache import caches

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TIMEOUT = 3600


@runtime_checkable
class CacheHook(Protocol):
    """Strategy consulted by filters for previously formatted tag data."""

    def check_cache(self, kind: str, digest: str) -> Optional[str]:
        """Return the cached formatted data for ``(kind, digest)``, or None."""
        ...

    def update_cache(self, kind: str, digest: str, data: str) -> bool:
        """Store formatted data. Returns False when the write was discarded."""
        ...


class NullCacheHook:
    """Hook used when no backing store is configured: every lookup misses."""

    def check_cache(self, kind: str, digest: str) -> Optional[str]:
        return None

    def update_cache(self, kind: str, digest: str, data: str) -> bool:
        return True


class DjangoCacheHook:
    """
    Cache hook backed by one of Django's configured caches.

    Args:
        alias: Name of the cache in ``settings.CACHES``
        timeout: Entry lifetime in seconds (None keeps entries forever)
        key_prefix: Namespace prepended to every key
    """

    def __init__(
        self,
        alias: str = "default",
        timeout: Optional[int] = DEFAULT_CACHE_TIMEOUT,
        key_prefix: str = "wikiengine",
    ):
        self.alias = alias
        self.timeout = timeout
        self.key_prefix = key_prefix

    def make_key(self, kind: str, digest: str) -> str:
        return f"{self.key_prefix}:{kind}:{digest}"

    def check_cache(self, kind: str, digest: str) -> Optional[str]:
        # caches[alias] hands out a per-thread connection
        try:
            return caches[self.alias].get(self.make_key(kind, digest))
        except Exception as e:
            logger.warning(f"Cache lookup failed for {kind}:{digest}: {e}")
            return None

    def update_cache(self, kind: str, digest: str, data: str) -> bool:
        try:
            caches[self.alias].set(self.make_key(kind, digest), data, self.timeout)
        except Exception as e:
            logger.warning(f"Cache update failed for {kind}:{digest}: {e}")
            return False
        return True


def content_digest(*parts: str) -> str:
    """
    Return the SHA-1 hex digest identifying a piece of extracted tag data.

    Every argument the transformation depends on must be passed, e.g. both the
    language and the source of a code block.
    """
    sha = hashlib.sha1()
    for index, part in enumerate(parts):
        if index:
            sha.update(b"\0")
        sha.update(part.encode("utf-8"))
    return sha.hexdigest()
