"""
Exceptions raised by the wiki markup pipeline.

Error handling:
  - FilterError  → a filter could not handle the syntax it recognises.
  - RenderError  → raised by the filter chain when any filter fails; the render
                   is aborted and the original exception is chained.
  - UnsupportedFormatError → no filter chain is configured for a format.

Cache backend failures and missing include files are never raised; they are
logged and treated as a cache miss or an empty lookup result.
"""

from typing import Optional


class MarkupError(Exception):
    """Base exception for all markup pipeline errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FilterError(MarkupError):
    """Raised by a filter that cannot parse or transform its input."""


class UnsupportedFormatError(MarkupError):
    """Raised when no filter chain is registered for a document format."""

    def __init__(self, format_name: str):
        super().__init__(
            f"No filter chain configured for format '{format_name}'",
            {"format": format_name},
        )
        self.format = format_name


class RenderError(MarkupError):
    """
    Raised when a filter fails during the extract or process pass.

    The failing filter's name and the pass it failed in are kept so callers
    can tell which part of the chain broke the page.
    """

    def __init__(self, filter_name: str, phase: str, reason: str = ""):
        message = f"Filter '{filter_name}' failed during {phase}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, {"filter": filter_name, "phase": phase})
        self.filter_name = filter_name
        self.phase = phase
