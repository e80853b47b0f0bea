"""Test bootstrap: minimal Django settings so the app, cache and templates load."""

import django
import pytest
from django.conf import settings

if not settings.configured:
    settings.configure(
        INSTALLED_APPS=["wikiengine"],
        CACHES={
            "default": {
                "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
                "LOCATION": "wikiengine-tests",
            }
        },
        TEMPLATES=[
            {
                "BACKEND": "django.template.backends.django.DjangoTemplates",
                "APP_DIRS": True,
            }
        ],
        # pandoc is not needed to run the tests
        WIKI_MARKUP={
            "CONVERTERS": {"markdown": "tests.helpers.paragraph_converter"},
        },
    )
    django.setup()


@pytest.fixture
def config():
    from tests.helpers import paragraph_converter
    from wikiengine.markup.config import MarkupConfig

    return MarkupConfig(converters={"markdown": paragraph_converter})


@pytest.fixture(autouse=True)
def clear_django_cache():
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()
