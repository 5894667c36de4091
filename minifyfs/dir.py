"""A read-only virtual hierarchy rooted at a base directory.

:class:`Dir` turns slash-separated logical paths, as an HTTP router hands
them over, into real paths beneath its root and opens them through a
:class:`~minifyfs.file.FileLoader`, so CSS and JavaScript come back minified.

Every open reads (and minifies) the file again.  Put a cache in front of it if
the same assets are served often.
"""

from __future__ import annotations

import os
import posixpath

from minifyfs.errors import InvalidPathError, OpenError
from minifyfs.file import File, FileLoader


def clean_slash_path(name: str) -> str:
    """Lexically clean ``name`` as an absolute slash path.

    ``.`` and repeated slashes are dropped and ``..`` never climbs above
    ``/``, so the result always starts with exactly one slash.
    """
    cleaned = posixpath.normpath("/" + name)
    # POSIX allows a leading "//"; a logical path never means that.
    return "/" + cleaned.lstrip("/")


class Dir:
    """Virtual root mapping logical paths beneath ``root``."""

    def __init__(self, root: str = "", loader: FileLoader | None = None) -> None:
        self._root = root or "."
        self._loader = loader if loader is not None else FileLoader()

    def __repr__(self) -> str:
        return f"Dir({self._root!r})"

    @property
    def root(self) -> str:
        return self._root

    @property
    def loader(self) -> FileLoader:
        return self._loader

    def resolve(self, name: str) -> str:
        """Return the real path ``name`` maps to, without touching the disk."""
        if os.sep != "/" and os.sep in name:
            raise InvalidPathError(name)
        relative = clean_slash_path(name).lstrip("/")
        if os.sep != "/":
            relative = relative.replace("/", os.sep)
        return os.path.normpath(os.path.join(self._root, relative))

    def open(self, name: str) -> File:
        full_name = self.resolve(name)
        try:
            return self._loader.open(full_name)
        except OpenError as exc:
            raise exc.wrap(f"Error opening file '{name}': {exc}", name) from exc


__all__ = ["Dir", "clean_slash_path"]
