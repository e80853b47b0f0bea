# wikiengine/markup/resolver.py
"""
File lookup for filters that pull in other wiki files (includes, images).

A reference starting with ``/`` is absolute within the wiki. Anything else is
relative to the directory of the page being rendered, and is looked up at the
page's own version unless another version is requested.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WikiFile:
    path: str
    data: str
    version_id: Optional[str] = None

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def extension(self) -> str:
        return posixpath.splitext(self.path)[1].lstrip(".").lower()


class FileLookup(Protocol):
    """Repository backend able to return a wiki file at a given version."""

    def file(self, path: str, version: Optional[str] = None) -> Optional[WikiFile]:
        ...


class LocalFileLookup:
    """
    Serve wiki files from a directory on disk.

    A working tree only has one version, so requested versions are ignored.
    Paths resolving outside ``root`` are treated as missing.
    """

    def __init__(self, root, encoding: str = "utf-8"):
        self.root = Path(root).resolve()
        self.encoding = encoding

    def file(self, path: str, version: Optional[str] = None) -> Optional[WikiFile]:
        candidate = (self.root / path).resolve()
        if not candidate.is_relative_to(self.root):
            logger.warning(f"Refusing to read '{path}' outside of {self.root}")
            return None
        if not candidate.is_file():
            return None
        if version:
            logger.debug(f"Ignoring version '{version}' for local file '{path}'")
        try:
            data = candidate.read_text(encoding=self.encoding)
        except (UnicodeDecodeError, OSError) as e:
            logger.warning(f"Cannot read '{path}' as {self.encoding} text: {e}")
            return None
        return WikiFile(path=candidate.relative_to(self.root).as_posix(), data=data)


class FileResolver:
    """Resolve file references made from inside one document."""

    def __init__(
        self,
        lookup: Optional[FileLookup],
        directory: str = ".",
        version_id: Optional[str] = None,
    ):
        self.lookup = lookup
        self.directory = directory or "."
        self.version_id = version_id

    def resolve_path(self, name: str) -> str:
        """Return the wiki path ``name`` refers to, without touching the backend."""
        if name.startswith("/"):
            return name[1:]
        if self.directory == ".":
            return name
        return posixpath.join(self.directory, name)

    def resolve(self, name: str, version: Optional[str] = None) -> Optional[WikiFile]:
        """
        Find the given file in the wiki.

        Args:
            name: Absolute (``/dir/file``) or relative path of the file
            version: Version to read; defaults to the document's version

        Returns:
            The WikiFile, or None if there is no lookup or no such file
        """
        if self.lookup is None:
            logger.debug(f"No file lookup configured, cannot resolve '{name}'")
            return None

        if version is None:
            version = self.version_id

        return self.lookup.file(self.resolve_path(name), version)
