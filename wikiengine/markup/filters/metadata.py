# wikiengine/markup/filters/metadata.py
"""
Front-matter filter.

Strips a leading YAML block from the page and stores its keys in the render
context's ``metadata`` so templates can show the page title, tags and so on:

    ---
    title: Getting started
    tags: [intro]
    ---
"""

import logging
import re

import yaml

from ..exceptions import FilterError
from .base import Filter

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)\r?\n(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


class MetadataFilter(Filter):
    kind = "metadata"

    def extract(self, data: str) -> str:
        match = FRONT_MATTER_PATTERN.match(data)
        if not match:
            return data

        try:
            values = yaml.safe_load(match.group("yaml"))
        except yaml.YAMLError as e:
            raise FilterError(f"Invalid front matter in '{self.context.name}': {e}") from e

        if values is None:
            values = {}
        if not isinstance(values, dict):
            logger.warning(
                f"Ignoring front matter in '{self.context.name}': "
                f"expected a mapping, got {type(values).__name__}"
            )
            return data[match.end():]

        if self.context.metadata is None:
            self.context.metadata = {}
        self.context.metadata.update(values)

        return data[match.end():]
