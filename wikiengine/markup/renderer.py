# wikiengine/markup/renderer.py

import logging
from typing import Callable, Optional, Sequence

from bs4 import BeautifulSoup

from .config import MarkupConfig, get_markup_config
from .context import RenderContext, SanitizerMode
from .exceptions import RenderError

logger = logging.getLogger(__name__)

EMPTY_PARAGRAPH = "<p></p>"


class FilterChain:
    """
    Drive a document through an ordered list of filters.

    Filters extract in declared order and process in exactly the reverse
    order, so a filter that extracts early (and shields its content from the
    filters after it) is also the last to put its content back.

    Args:
        filters: Filter classes, or any callable taking the render context
    """

    def __init__(self, filters: Sequence[Callable]):
        self.filters = list(filters)

    def render(self, context: RenderContext, callback: Optional[Callable] = None) -> str:
        """
        Render the context's source text.

        Args:
            context: State for this render only
            callback: Optional callable receiving a BeautifulSoup parse of the
                document after the extract pass

        Returns:
            The rendered HTML
        """
        chain = [self._build(filter_class, context) for filter_class in self.filters]
        logger.debug(
            f"Rendering '{context.name or '<string>'}' ({context.format}) "
            f"through {[f.name for f in chain]}"
        )

        data = str(context.source_text)

        # First we extract the data through the chain...
        for item in chain:
            data = self._run(item, "extract", data)

        # The last filter to extract should be the converter, so what we have
        # now is HTML with placeholders in it
        if callback is not None:
            callback(BeautifulSoup(data, "html.parser"))

        # Then we process the data through the chain backwards
        for item in reversed(chain):
            data = self._run(item, "process", data)

        data = data.replace(EMPTY_PARAGRAPH, "")

        if context.target_encoding:
            try:
                data = data.encode(context.target_encoding, "xmlcharrefreplace").decode(
                    context.target_encoding
                )
            except LookupError as e:
                logger.error(f"Unknown target encoding '{context.target_encoding}'")
                raise RenderError(type(self).__name__, "encode", str(e)) from e

        return data

    @staticmethod
    def _build(filter_class, context: RenderContext):
        try:
            return filter_class(context)
        except Exception as e:
            # partials and other callables have no __name__
            target = getattr(filter_class, "func", filter_class)
            name = getattr(target, "__name__", repr(target))
            logger.error(f"Filter {name} could not be constructed: {e}", exc_info=True)
            raise RenderError(name, "construct", str(e)) from e

    @staticmethod
    def _run(item, phase: str, data: str) -> str:
        name = getattr(item, "name", type(item).__name__)
        try:
            return getattr(item, phase)(data)
        except Exception as e:
            logger.error(f"Filter {name} failed during {phase}: {e}", exc_info=True)
            raise RenderError(name, phase, str(e)) from e


def build_context(
    source_text: str,
    *,
    config: MarkupConfig,
    path: Optional[str] = None,
    format: Optional[str] = None,
    version_id: Optional[str] = None,
    no_follow: bool = False,
    encoding: Optional[str] = None,
    include_levels: Optional[int] = None,
    lookup=None,
    cache=None,
) -> RenderContext:
    """Create the RenderContext for one render call."""
    if not config.sanitize:
        sanitizer_mode = SanitizerMode.NONE
    elif no_follow:
        sanitizer_mode = SanitizerMode.HISTORY
    else:
        sanitizer_mode = SanitizerMode.STANDARD

    if format is None:
        format = config.format_for_path(path) if path else config.default_format

    options = dict(
        format=format,
        document_version_id=version_id,
        sanitizer_mode=sanitizer_mode,
        target_encoding=encoding,
        max_include_depth=(
            config.max_include_depth if include_levels is None else include_levels
        ),
        cache=config.cache_hook if cache is None else cache,
        lookup=lookup,
        converter=config.converter_for(format),
    )
    if path:
        return RenderContext.for_path(source_text, path, **options)
    return RenderContext(source_text=source_text, **options)


def render_markup(
    text: str,
    *,
    path: Optional[str] = None,
    format: Optional[str] = None,
    version_id: Optional[str] = None,
    no_follow: bool = False,
    encoding: Optional[str] = None,
    include_levels: Optional[int] = None,
    callback: Optional[Callable] = None,
    lookup=None,
    cache=None,
    config: Optional[MarkupConfig] = None,
) -> str:
    """
    Main rendering function for wiki pages.

    Args:
        text: Raw page source
        path: Wiki path of the page; picks the format and the directory
            relative file references resolve against
        format: Format identifier, overriding the one derived from ``path``
        version_id: Version the page is rendered at
        no_follow: Use the history sanitizer (rel="nofollow" on links)
        encoding: Target encoding of the output
        include_levels: How deep include filters may nest
        callback: Receives the parsed HTML between the two passes
        lookup: FileLookup used to resolve other wiki files
        cache: Cache hook overriding the configured one
        config: MarkupConfig; read from settings when omitted
    """
    config = config or get_markup_config()
    context = build_context(
        text,
        config=config,
        path=path,
        format=format,
        version_id=version_id,
        no_follow=no_follow,
        encoding=encoding,
        include_levels=include_levels,
        lookup=lookup,
        cache=cache,
    )
    chain = FilterChain(config.filters_for(context.format))
    return chain.render(context, callback=callback)
