"""Filters, converters and collaborators shared by the tests."""

import re

from wikiengine.markup.filters.base import Filter
from wikiengine.markup.resolver import WikiFile


def paragraph_converter(text):
    """Tiny stand-in for pandoc: every blank-line separated block is a paragraph."""
    blocks = [block.strip() for block in re.split(r"\n\s*\n", text)]
    return "\n".join(f"<p>{block}</p>" for block in blocks if block)


class BoldFilter(Filter):
    kind = "bold"

    def extract(self, data):
        def replace(match):
            token = self.placeholder(len(self.map))
            self.map[token] = match.group(1)
            return token

        return re.sub(r"\*\*(.+?)\*\*", replace, data)

    def process(self, data):
        for token, text in self.map.items():
            data = self.reinsert(data, token, f"<strong>{text}</strong>")
        return data


class VerbatimFilter(Filter):
    """Shields [[...]] from the rest of the chain and puts it back untouched."""

    kind = "verbatim"

    def extract(self, data):
        def replace(match):
            token = self.placeholder(len(self.map))
            self.map[token] = match.group(0)
            return token

        return re.sub(r"\[\[.*?\]\]", replace, data)

    def process(self, data):
        for token, original in self.map.items():
            data = self.reinsert(data, token, original)
        return data


class RecordingFilter(Filter):
    """Appends (label, phase) to ``calls`` and optionally fails in one phase."""

    def __init__(self, context, label, calls, fail_on=None):
        super().__init__(context)
        self.label = label
        self.calls = calls
        self.fail_on = fail_on

    @property
    def name(self):
        return self.label

    def extract(self, data):
        self.calls.append((self.label, "extract"))
        if self.fail_on == "extract":
            raise ValueError(f"{self.label} cannot extract")
        return data

    def process(self, data):
        self.calls.append((self.label, "process"))
        if self.fail_on == "process":
            raise ValueError(f"{self.label} cannot process")
        return data


class RecordingCacheHook:
    def __init__(self):
        self.store = {}
        self.checks = []
        self.updates = []

    def check_cache(self, kind, digest):
        self.checks.append((kind, digest))
        return self.store.get((kind, digest))

    def update_cache(self, kind, digest, data):
        self.updates.append((kind, digest))
        self.store[(kind, digest)] = data
        return True


class BrokenCacheHook:
    def check_cache(self, kind, digest):
        raise ConnectionError("cache backend is down")

    def update_cache(self, kind, digest, data):
        raise ConnectionError("cache backend is down")


class MemoryLookup:
    def __init__(self, files=None):
        self.files = dict(files or {})
        self.requests = []

    def file(self, path, version=None):
        self.requests.append((path, version))
        if path not in self.files:
            return None
        return WikiFile(path=path, data=self.files[path], version_id=version)
