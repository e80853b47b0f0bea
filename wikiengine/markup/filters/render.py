# wikiengine/markup/filters/render.py

from .base import Filter
from ..exceptions import FilterError


class RenderFilter(Filter):
    """
    Convert the document from its markup format into HTML.

    This should be the last filter to extract, so every other filter has
    already replaced its syntax with placeholders by the time the converter
    runs. The output of the extract pass is therefore HTML.
    """

    kind = "render"

    def extract(self, data: str) -> str:
        converter = self.context.converter
        if converter is None:
            raise FilterError(
                f"No converter available for format '{self.context.format}'",
                {"format": self.context.format},
            )
        return converter(data)
