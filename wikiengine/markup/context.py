# wikiengine/markup/context.py
"""
Per-render state shared by every filter in one chain.

A RenderContext is built at the start of a render and dropped at the end. It
is never shared between concurrent renders. Filters may write to ``toc`` and
``metadata``; everything else is read-only configuration for the render.
"""

from __future__ import annotations

import enum
import logging
import posixpath
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .cache import CacheHook, NullCacheHook
from .resolver import FileLookup, FileResolver, WikiFile

logger = logging.getLogger(__name__)

DEFAULT_INCLUDE_DEPTH = 10


class SanitizerMode(enum.Enum):
    NONE = "none"
    STANDARD = "standard"
    HISTORY = "history"  # history/diff views: links get rel="nofollow"


@dataclass
class RenderContext:
    source_text: str
    format: str = "markdown"
    name: str = ""
    document_directory: str = "."
    document_version_id: Optional[str] = None
    sanitizer_mode: SanitizerMode = SanitizerMode.STANDARD
    target_encoding: Optional[str] = None
    max_include_depth: int = DEFAULT_INCLUDE_DEPTH
    cache: CacheHook = field(default_factory=NullCacheHook)
    lookup: Optional[FileLookup] = None
    converter: Optional[Callable[[str], str]] = None
    toc: Any = None
    metadata: Optional[dict] = None
    resolver: FileResolver = field(init=False, repr=False)

    def __post_init__(self):
        self.resolver = FileResolver(
            self.lookup, self.document_directory, self.document_version_id
        )

    @classmethod
    def for_path(
        cls, source_text: str, path: str, format: Optional[str] = None, **kwargs
    ) -> "RenderContext":
        """Build a context for the document stored at wiki path ``path``."""
        path = path.lstrip("/")
        if format is None:
            from .config import get_markup_config

            format = get_markup_config().format_for_path(path)
        return cls(
            source_text=source_text,
            format=format,
            name=posixpath.basename(path),
            document_directory=posixpath.dirname(path) or ".",
            **kwargs,
        )

    @property
    def can_include(self) -> bool:
        """False once recursive inclusion has used up its depth budget."""
        return self.max_include_depth > 0

    def find_file(self, name: str, version: Optional[str] = None) -> Optional[WikiFile]:
        return self.resolver.resolve(name, version)

    def check_cache(self, kind: str, digest: str) -> Optional[str]:
        """Ask the cache hook for formatted data; hook failures count as a miss."""
        try:
            return self.cache.check_cache(kind, digest)
        except Exception as e:
            logger.warning(f"Cache hook lookup for {kind}:{digest} failed: {e}")
            return None

    def update_cache(self, kind: str, digest: str, data: str) -> bool:
        """Hand formatted data to the cache hook; hook failures are discarded."""
        try:
            return bool(self.cache.update_cache(kind, digest, data))
        except Exception as e:
            logger.warning(f"Cache hook update for {kind}:{digest} failed: {e}")
            return False
