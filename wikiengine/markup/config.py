# wikiengine/markup/config.py
"""
Configuration for the wiki markup pipeline.

Defaults live in this module; a project overrides them with a ``WIKI_MARKUP``
dict in its Django settings:

    WIKI_MARKUP = {
        "FORMATS": {"markdown": ["myapp.filters.WikiLinkFilter", ...]},
        "CONVERTERS": {"markdown": "myapp.converters.commonmark"},
        "EXTENSIONS": {"mdx": "markdown"},
        "SANITIZE": True,
        "MAX_INCLUDE_DEPTH": 10,
        "CACHE_HOOK": "wikiengine.markup.cache.DjangoCacheHook",
        "CACHE_HOOK_OPTIONS": {"alias": "default", "timeout": 3600},
    }

Filters, converters and cache hooks may be given as objects or dotted paths.
The resulting MarkupConfig is passed explicitly to the renderer; nothing is
registered globally.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Callable, Optional

from django.conf import settings
from django.utils.module_loading import import_string

from .cache import CacheHook, NullCacheHook
from .context import DEFAULT_INCLUDE_DEPTH
from .converters import PANDOC_INPUT_FORMATS, default_converters
from .exceptions import UnsupportedFormatError
from .filters import FILTER_CHAIN, PLAIN_TEXT_CHAIN

DEFAULT_FORMAT = "markdown"

# File extension -> format identifier
DEFAULT_EXTENSIONS = {
    "md": "markdown",
    "markdown": "markdown",
    "mkd": "markdown",
    "mkdn": "markdown",
    "mdown": "markdown",
    "textile": "textile",
    "rst": "rst",
    "rest": "rst",
    "org": "org",
    "mediawiki": "mediawiki",
    "wiki": "mediawiki",
    "creole": "creole",
    "txt": "txt",
}


def default_formats() -> dict:
    formats = {name: list(FILTER_CHAIN) for name in PANDOC_INPUT_FORMATS}
    formats["txt"] = list(PLAIN_TEXT_CHAIN)
    return formats


@dataclass
class MarkupConfig:
    formats: dict = field(default_factory=default_formats)
    converters: dict = field(default_factory=default_converters)
    extensions: dict = field(default_factory=lambda: dict(DEFAULT_EXTENSIONS))
    default_format: str = DEFAULT_FORMAT
    sanitize: bool = True
    max_include_depth: int = DEFAULT_INCLUDE_DEPTH
    cache_hook: CacheHook = field(default_factory=NullCacheHook)

    def filters_for(self, format_name: str) -> list:
        """Return the ordered filter constructors for a format."""
        try:
            return list(self.formats[format_name])
        except KeyError:
            raise UnsupportedFormatError(format_name) from None

    def converter_for(self, format_name: str) -> Optional[Callable[[str], str]]:
        return self.converters.get(format_name)

    def format_for_path(self, path: str) -> str:
        extension = posixpath.splitext(path)[1].lstrip(".").lower()
        return self.extensions.get(extension, self.default_format)


def _load(value):
    """Import ``value`` if it is a dotted path, otherwise return it as is."""
    if isinstance(value, str):
        return import_string(value)
    return value


def _build_cache_hook(value, options: dict) -> CacheHook:
    hook = _load(value)
    if isinstance(hook, type):
        return hook(**options)
    return hook


def get_markup_config() -> MarkupConfig:
    """
    Build the markup configuration from defaults and ``settings.WIKI_MARKUP``.

    Returns:
        A fresh MarkupConfig; callers may adjust it without affecting others
    """
    overrides = getattr(settings, "WIKI_MARKUP", {}) if settings.configured else {}

    extra_args = overrides.get("PANDOC_EXTRA_ARGS")
    config = MarkupConfig(converters=default_converters(extra_args))

    for name, chain in overrides.get("FORMATS", {}).items():
        config.formats[name] = [_load(item) for item in chain]

    for name, converter in overrides.get("CONVERTERS", {}).items():
        config.converters[name] = _load(converter)

    config.extensions.update(overrides.get("EXTENSIONS", {}))
    config.default_format = overrides.get("DEFAULT_FORMAT", config.default_format)
    config.sanitize = overrides.get("SANITIZE", config.sanitize)
    config.max_include_depth = overrides.get("MAX_INCLUDE_DEPTH", config.max_include_depth)

    if overrides.get("CACHE_HOOK"):
        config.cache_hook = _build_cache_hook(
            overrides["CACHE_HOOK"], overrides.get("CACHE_HOOK_OPTIONS", {})
        )

    return config
