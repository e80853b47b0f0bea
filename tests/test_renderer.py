from concurrent.futures import ThreadPoolExecutor

import pytest
from django.test import override_settings

from tests.helpers import BoldFilter, MemoryLookup, RecordingCacheHook, paragraph_converter
from wikiengine.markup.cache import DjangoCacheHook, NullCacheHook
from wikiengine.markup.config import MarkupConfig, get_markup_config
from wikiengine.markup.context import SanitizerMode
from wikiengine.markup.converters import convert_plain_text
from wikiengine.markup.exceptions import UnsupportedFormatError
from wikiengine.markup.filters import FILTER_CHAIN, RenderFilter
from wikiengine.markup.renderer import build_context, render_markup


def test_render_markup_runs_default_chain(config):
    html = render_markup("---\ntitle: Home\n---\nHello <b>there</b>", config=config)

    assert html == "<p>Hello <b>there</b></p>"


def test_render_markup_selects_chain_by_format(config):
    config.formats["markdown"] = [BoldFilter, RenderFilter]

    assert render_markup("Hello **world**", config=config) == (
        "<p>Hello <strong>world</strong></p>"
    )


def test_plain_text_is_escaped(config):
    config.converters["txt"] = convert_plain_text

    html = render_markup("a < b", path="notes.txt", config=config)

    assert html == "<pre>a &lt; b</pre>"


def test_unsupported_format(config):
    with pytest.raises(UnsupportedFormatError):
        render_markup("text", format="asciidoc", config=config)


def test_no_follow_selects_history_sanitizer(config):
    assert build_context("x", config=config).sanitizer_mode is SanitizerMode.STANDARD
    assert build_context("x", config=config, no_follow=True).sanitizer_mode is SanitizerMode.HISTORY

    html = render_markup('<a href="https://example.com">x</a>', no_follow=True, config=config)
    assert 'rel="nofollow"' in html


def test_sanitize_disabled_in_config(config):
    config.sanitize = False

    context = build_context("x", config=config, no_follow=True)

    assert context.sanitizer_mode is SanitizerMode.NONE


def test_build_context_from_path(config):
    lookup = MemoryLookup()
    context = build_context(
        "x",
        config=config,
        path="docs/Guide.md",
        version_id="v3",
        encoding="latin-1",
        include_levels=2,
        lookup=lookup,
    )

    assert context.format == "markdown"
    assert context.document_directory == "docs"
    assert context.document_version_id == "v3"
    assert context.target_encoding == "latin-1"
    assert context.max_include_depth == 2
    assert context.lookup is lookup
    assert context.converter is paragraph_converter
    assert isinstance(context.cache, NullCacheHook)


def test_explicit_cache_overrides_configured_hook(config):
    hook = RecordingCacheHook()

    assert build_context("x", config=config, cache=hook).cache is hook


def test_callback_is_forwarded(config):
    seen = []

    render_markup("Hello", config=config, callback=lambda doc: seen.append(doc.p.get_text()))

    assert seen == ["Hello"]


def test_concurrent_renders_do_not_share_state(config):
    pages = [f"---\ntitle: Page {i}\n---\nBody {i}" for i in range(20)]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda text: render_markup(text, config=config), pages))

    assert results == [f"<p>Body {i}</p>" for i in range(20)]


# Configuration


def test_default_config():
    config = MarkupConfig()

    assert config.filters_for("markdown") == FILTER_CHAIN
    assert config.filters_for("txt") == [RenderFilter]
    assert config.converter_for("txt") is convert_plain_text
    assert config.converter_for("nope") is None
    assert config.format_for_path("Page.textile") == "textile"
    assert config.format_for_path("Page.WIKI") == "mediawiki"
    assert config.format_for_path("Page") == "markdown"
    assert config.max_include_depth == 10


def test_filters_for_returns_a_copy():
    config = MarkupConfig()

    config.filters_for("markdown").append(BoldFilter)

    assert BoldFilter not in config.filters_for("markdown")


def test_settings_override_config():
    with override_settings(
        WIKI_MARKUP={
            "FORMATS": {"bold": ["tests.helpers.BoldFilter", RenderFilter]},
            "CONVERTERS": {"bold": "tests.helpers.paragraph_converter"},
            "EXTENSIONS": {"bd": "bold"},
            "SANITIZE": False,
            "MAX_INCLUDE_DEPTH": 3,
            "CACHE_HOOK": "wikiengine.markup.cache.DjangoCacheHook",
            "CACHE_HOOK_OPTIONS": {"key_prefix": "custom"},
        }
    ):
        config = get_markup_config()

    assert config.filters_for("bold") == [BoldFilter, RenderFilter]
    assert config.converter_for("bold") is paragraph_converter
    assert config.format_for_path("page.bd") == "bold"
    assert config.sanitize is False
    assert config.max_include_depth == 3
    assert isinstance(config.cache_hook, DjangoCacheHook)
    assert config.cache_hook.key_prefix == "custom"
    # Untouched defaults survive
    assert config.filters_for("markdown") == FILTER_CHAIN


def test_settings_accept_hook_instances():
    hook = RecordingCacheHook()

    with override_settings(WIKI_MARKUP={"CACHE_HOOK": hook}):
        assert get_markup_config().cache_hook is hook


def test_settings_render_through_page_path():
    with override_settings(
        WIKI_MARKUP={
            "FORMATS": {"bold": ["tests.helpers.BoldFilter", RenderFilter]},
            "CONVERTERS": {"bold": "tests.helpers.paragraph_converter"},
            "EXTENSIONS": {"bd": "bold"},
        }
    ):
        html = render_markup("**x**", path="notes/page.bd")

    assert html == "<p><strong>x</strong></p>"
