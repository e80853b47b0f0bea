# wikiengine/markup/filters/base.py
"""
Base class for filters in the wiki markup chain.

A filter takes part in two passes over the document:

    extract(data) -> data   runs in chain order; remove the syntax this filter
                            recognises and leave a placeholder token behind
    process(data) -> data   runs in reverse chain order; swap each token for
                            the final rendered content

Placeholder tokens are purely alphanumeric so that markup converters and the
sanitizer pass them through untouched, and they carry the filter's kind so
tokens from different filters never collide.
"""

from __future__ import annotations

import re

PLACEHOLDER_PREFIX = "WIKIENGINE"
PLACEHOLDER_SUFFIX = "PLACEHOLDER"


def _token_kind(kind: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "", kind).upper()


class Filter:
    kind = "filter"

    def __init__(self, context):
        self.context = context
        # placeholder token -> whatever the filter needs to finish the job
        self.map: dict[str, object] = {}

    @property
    def name(self) -> str:
        return type(self).__name__

    def extract(self, data: str) -> str:
        return data

    def process(self, data: str) -> str:
        return data

    def placeholder(self, ident) -> str:
        """Return the token standing in for extracted item ``ident``."""
        return f"{PLACEHOLDER_PREFIX}{_token_kind(self.kind)}{ident}{PLACEHOLDER_SUFFIX}"

    def reinsert(self, data: str, token: str, content: str, block: bool = False) -> str:
        """
        Replace every occurrence of ``token`` with ``content``.

        Converters wrap a token that stood on its own line in a paragraph. For
        block content (``block=True``) that wrapper is dropped along with the
        token; inline content stays inside its paragraph.
        """
        if block:
            data = data.replace(f"<p>{token}</p>", content)
        return data.replace(token, content)

    def __repr__(self):
        return f"<{self.name} kind={self.kind!r}>"
