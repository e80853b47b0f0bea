# wikiengine/markup/converters.py
"""
Markup-to-HTML converters, one per document format.

Each converter is a plain ``str -> str`` function. The render filter calls the
one selected for the page's format; nothing else in the chain converts.
"""

from functools import partial

import pypandoc
from django.utils.html import escape

# Pandoc reader for each wiki format
PANDOC_INPUT_FORMATS = {
    "markdown": (
        "markdown+autolink_bare_uris+strikeout+superscript+subscript"
        "+task_lists+pipe_tables+grid_tables+definition_lists+footnotes"
        "+fenced_code_attributes+raw_html+header_attributes"
        "+implicit_header_references+tex_math_dollars"
        "-yaml_metadata_block"
    ),
    "textile": "textile",
    "rst": "rst",
    "mediawiki": "mediawiki",
    "org": "org",
    "creole": "creole",
}

PANDOC_EXTRA_ARGS = [
    # Math rendering with MathJax
    "--mathjax",
]


def convert_with_pandoc(text: str, input_format: str, extra_args=None) -> str:
    """Convert ``text`` to an HTML5 fragment with pandoc."""
    return pypandoc.convert_text(
        text,
        to="html5",
        format=input_format,
        extra_args=PANDOC_EXTRA_ARGS if extra_args is None else extra_args,
    )


def convert_plain_text(text: str) -> str:
    return f"<pre>{escape(text)}</pre>"


def default_converters(extra_args=None) -> dict:
    """Return the format -> converter mapping used when settings add nothing."""
    converters = {
        name: partial(convert_with_pandoc, input_format=reader, extra_args=extra_args)
        for name, reader in PANDOC_INPUT_FORMATS.items()
    }
    converters["txt"] = convert_plain_text
    return converters
