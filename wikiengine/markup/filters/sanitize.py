# wikiengine/markup/filters/sanitize.py
"""
Sanitize converted HTML with bleach.

Runs in the process pass, after the converter's output comes back through the
chain and before earlier filters (code highlighting, for instance) reinsert
their trusted markup. The render context picks the mode:

    NONE      leave the HTML alone
    STANDARD  clean against the allow-lists below
    HISTORY   clean, then mark every link rel="nofollow" (history/diff views)
"""

import logging
from functools import lru_cache

import bleach
from bs4 import BeautifulSoup

from ..context import SanitizerMode
from .base import Filter

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _get_bleach_config():
    """Cache bleach configuration for better performance."""
    allowed_tags = set(bleach.sanitizer.ALLOWED_TAGS).union(
        {
            # text
            "p",
            "br",
            "wbr",
            "div",
            "span",
            "section",
            "cite",
            "mark",
            "ins",
            "del",
            "s",
            "sup",
            "sub",
            # headings
            "h1",
            "h2",
            "h3",
            "h4",
            "h5",
            "h6",
            # lists
            "ul",
            "ol",
            "li",
            "hr",
            "blockquote",
            "dl",
            "dt",
            "dd",
            # code
            "pre",
            "code",
            "kbd",
            "samp",
            "var",
            # tables
            "table",
            "thead",
            "tbody",
            "tfoot",
            "tr",
            "th",
            "td",
            "caption",
            "colgroup",
            "col",
            # media
            "img",
            "figure",
            "figcaption",
            # forms (for task lists)
            "input",
            "label",
            # semantic
            "time",
            "abbr",
            "acronym",
        }
    )

    allowed_attrs = {
        "*": ["class", "id", "title"],
        "a": ["href", "title", "rel"],
        "img": ["src", "alt", "title", "width", "height"],
        "th": ["colspan", "rowspan", "scope"],
        "td": ["colspan", "rowspan"],
        "input": ["type", "checked", "disabled"],
        "time": ["datetime"],
        "blockquote": ["cite"],
        "ol": ["start", "type"],
        "col": ["span", "width"],
    }

    allowed_protocols = ["http", "https", "mailto", "ftp", "irc", "apt"]

    return allowed_tags, allowed_attrs, allowed_protocols


def clean_html(html: str) -> str:
    allowed_tags, allowed_attrs, allowed_protocols = _get_bleach_config()
    return bleach.clean(
        html,
        tags=allowed_tags,
        attributes=allowed_attrs,
        protocols=allowed_protocols,
        strip=False,  # Escape disallowed tags instead of dropping their text
    )


def add_nofollow(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for link in soup.find_all("a"):
        link["rel"] = "nofollow"
    return str(soup)


class SanitizeFilter(Filter):
    kind = "sanitize"

    def process(self, data: str) -> str:
        mode = self.context.sanitizer_mode
        if mode is SanitizerMode.NONE:
            return data

        data = clean_html(data)
        if mode is SanitizerMode.HISTORY:
            data = add_nofollow(data)
        return data
