"""
Wiki markup rendering: a two-pass filter chain over the page source.
"""

from .cache import CacheHook, DjangoCacheHook, NullCacheHook, content_digest
from .config import MarkupConfig, get_markup_config
from .context import RenderContext, SanitizerMode
from .exceptions import FilterError, MarkupError, RenderError, UnsupportedFormatError
from .renderer import FilterChain, build_context, render_markup
from .resolver import FileLookup, FileResolver, LocalFileLookup, WikiFile

__all__ = [
    "CacheHook",
    "DjangoCacheHook",
    "NullCacheHook",
    "content_digest",
    "MarkupConfig",
    "get_markup_config",
    "RenderContext",
    "SanitizerMode",
    "FilterError",
    "MarkupError",
    "RenderError",
    "UnsupportedFormatError",
    "FilterChain",
    "build_context",
    "render_markup",
    "FileLookup",
    "FileResolver",
    "LocalFileLookup",
    "WikiFile",
]
