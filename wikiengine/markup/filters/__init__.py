# wikiengine/markup/filters/__init__.py

from .base import Filter
from .code import CodeFilter
from .metadata import MetadataFilter
from .render import RenderFilter
from .sanitize import SanitizeFilter

FILTER_CHAIN = [
    MetadataFilter,  # Front matter must go before anything else reads the page
    CodeFilter,  # Shield code blocks from the converter and sanitizer
    SanitizeFilter,  # Cleans converter output, before code is reinserted
    RenderFilter,  # Markup -> HTML; must be last to extract
    # Order matters - extract runs top to bottom, process bottom to top
]

# Plain text is escaped by its converter, nothing else to do
PLAIN_TEXT_CHAIN = [
    RenderFilter,
]

__all__ = [
    "Filter",
    "CodeFilter",
    "MetadataFilter",
    "RenderFilter",
    "SanitizeFilter",
    "FILTER_CHAIN",
    "PLAIN_TEXT_CHAIN",
]
