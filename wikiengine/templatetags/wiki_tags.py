# wikiengine/templatetags/wiki_tags.py

from django import template
from django.utils.safestring import mark_safe

from wikiengine.markup.renderer import render_markup

register = template.Library()


@register.filter(name="wiki_markup")
def wiki_markup_filter(value):
    return mark_safe(render_markup(value))


@register.filter(name="wiki_markup_history")
def wiki_markup_history_filter(value):
    """Render for history and diff views (links get rel="nofollow")"""
    return mark_safe(render_markup(value, no_follow=True))


@register.simple_tag(takes_context=True)
def wiki_markup_with_context(context, value, path=None):
    """Template tag that renders a page at the path/version from the template context"""
    return mark_safe(
        render_markup(
            value,
            path=path or context.get("page_path"),
            version_id=context.get("page_version"),
        )
    )
