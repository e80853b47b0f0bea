# wikiengine/markup/filters/code.py
"""
Fenced code block filter with cached syntax highlighting.

Extract:
    ```python              →   WIKIENGINECODE<sha1>PLACEHOLDER
    print("hi")
    ```

Process:
    placeholder            →   <div class="highlight"><pre>...</pre></div>

Code blocks are pulled out before any other filter sees the text, so neither
the converter nor the sanitizer touches their contents. Highlighted output is
cached by the digest of (language, code).
"""

from __future__ import annotations

import logging
import re

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from ..cache import content_digest
from .base import Filter

logger = logging.getLogger(__name__)

FENCED_CODE_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[\w+#.-]*)[^\r\n]*\r?\n"
    r"(?P<code>.*?)\r?\n?"
    r"^(?P=fence)[ \t]*\r?$",
    re.MULTILINE | re.DOTALL,
)


def highlight_code(code: str, lang: str) -> str:
    """Highlight ``code`` with Pygments, falling back to plain text."""
    try:
        lexer = get_lexer_by_name(lang, stripall=False) if lang else TextLexer()
    except ClassNotFound:
        logger.debug(f"No lexer for language '{lang}', rendering as plain text")
        lexer = TextLexer()
    formatter = HtmlFormatter(cssclass="highlight")
    return highlight(code, lexer, formatter)


class CodeFilter(Filter):
    kind = "code"

    def extract(self, data: str) -> str:
        def replace_block(match):
            lang = match.group("lang").lower()
            # Form submissions use CRLF; the digest must not depend on it
            code = match.group("code").replace("\r\n", "\n")
            digest = content_digest(lang, code)
            token = self.placeholder(digest)

            if token not in self.map:
                self.map[token] = {
                    "lang": lang,
                    "code": code,
                    "digest": digest,
                    "output": self.context.check_cache(self.kind, digest),
                }

            # Blank lines keep the token in a paragraph of its own
            return f"\n\n{token}\n\n"

        return FENCED_CODE_PATTERN.sub(replace_block, data)

    def process(self, data: str) -> str:
        for token, block in self.map.items():
            output = block["output"]
            if output is None:
                output = highlight_code(block["code"], block["lang"])
                block["output"] = output
                self.context.update_cache(self.kind, block["digest"], output)
            data = self.reinsert(data, token, output, block=True)
        return data
