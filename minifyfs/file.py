"""In-memory file handles with on-the-fly minification.

:class:`FileLoader` reads a file whole, minifies it when it is CSS or
JavaScript and returns a :class:`File`.  The handle is a reader, a seeker, a
directory lister and its own file info at the same time; each of those
capabilities is a small interface below.
"""

from __future__ import annotations

import io
import logging
import mimetypes
import os
import stat as stat_module
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timezone

from minifyfs.errors import DirectoryEnumerationError, MinifyError, ReadError, StatError
from minifyfs.minifier import MinifierRegistry, default_registry

logger = logging.getLogger(__name__)

MINIFIED_CONTENT_TYPES = frozenset(
    {
        "text/css",
        "application/x-javascript",
        "application/javascript",
        "application/ecmascript",
        "text/x-javascript",
        "text/javascript",
        "text/ecmascript",
    }
)

ENCODING_CONTENT_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "compress": "application/x-compress",
    "br": "application/x-brotli",
}


def content_type_for(path: str) -> str:
    """Return the MIME type registered for ``path``'s extension, or ``""``."""
    ext = os.path.splitext(path)[1]
    if not ext:
        return ""
    content_type, encoding = mimetypes.guess_type("file" + ext, strict=False)
    if content_type is None and encoding is not None:
        # ".gz" and friends are reported as encodings, not types.
        content_type = ENCODING_CONTENT_TYPES.get(encoding)
    return content_type or ""


# -- capability interfaces --------------------------------------------------
class FileInfo(ABC):
    """Metadata describing a file or directory."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def size(self) -> int: ...

    @property
    @abstractmethod
    def mode(self) -> int: ...

    @property
    @abstractmethod
    def mod_time(self) -> datetime: ...

    @property
    @abstractmethod
    def is_dir(self) -> bool: ...

    @property
    @abstractmethod
    def sys(self) -> os.stat_result: ...


class Reader(ABC):
    @abstractmethod
    def read(self, size: int = -1) -> bytes: ...

    @abstractmethod
    def readinto(self, buffer) -> int: ...


class Seeker(ABC):
    @abstractmethod
    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int: ...

    @abstractmethod
    def tell(self) -> int: ...


class DirectoryLister(ABC):
    @abstractmethod
    def readdir(self, count: int = 0) -> list[FileInfo]: ...


class DirEntryInfo(FileInfo):
    """File info for one entry returned by :meth:`File.readdir`."""

    def __init__(self, name: str, stats: os.stat_result) -> None:
        self._name = name
        self._stats = stats

    def __repr__(self) -> str:
        return f"DirEntryInfo({self._name!r}, is_dir={self.is_dir})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        return self._stats.st_size

    @property
    def mode(self) -> int:
        return self._stats.st_mode

    @property
    def mod_time(self) -> datetime:
        return datetime.fromtimestamp(self._stats.st_mtime, tz=timezone.utc)

    @property
    def is_dir(self) -> bool:
        return stat_module.S_ISDIR(self._stats.st_mode)

    @property
    def sys(self) -> os.stat_result:
        return self._stats


# -- the handle ---------------------------------------------------------------
class File(FileInfo, Reader, Seeker, DirectoryLister):
    """One opened, possibly minified, file or directory.

    Regular files hold their whole (minified) content in memory; directories
    hold no content and list their children from disk on demand.  No native
    descriptor is kept open, so :meth:`close` has nothing to release.
    """

    def __init__(
        self,
        name: str,
        stats: os.stat_result,
        contents: bytes = b"",
        content_type: str = "",
    ) -> None:
        self._name = name
        self.stats = stats
        self.contents = contents
        self.content_type = content_type
        self._reader = io.BytesIO(contents)

    def __repr__(self) -> str:
        return f"File({self._name!r}, size={self.size}, is_dir={self.is_dir})"

    def __enter__(self) -> "File":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # FileInfo ---------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        # Minification changes the length, so only directories report st_size.
        if self.is_dir:
            return self.stats.st_size
        return len(self.contents)

    @property
    def mode(self) -> int:
        return self.stats.st_mode

    @property
    def mod_time(self) -> datetime:
        return datetime.fromtimestamp(self.stats.st_mtime, tz=timezone.utc)

    @property
    def is_dir(self) -> bool:
        return stat_module.S_ISDIR(self.stats.st_mode)

    @property
    def sys(self) -> os.stat_result:
        return self.stats

    def stat(self) -> "File":
        return self

    # Reader / Seeker --------------------------------------------------------
    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        return self._reader.read(size)

    def readinto(self, buffer) -> int:
        return self._reader.readinto(buffer)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        if whence == os.SEEK_SET:
            position = offset
        elif whence == os.SEEK_CUR:
            position = self._reader.tell() + offset
        elif whence == os.SEEK_END:
            position = len(self.contents) + offset
        else:
            raise ValueError(f"invalid whence: {whence}")
        if position < 0:
            raise ValueError(f"negative position: {position}")
        return self._reader.seek(position)

    def tell(self) -> int:
        return self._reader.tell()

    # DirectoryLister --------------------------------------------------------
    def readdir(self, count: int = 0) -> list[DirEntryInfo]:
        """List the directory's entries as they are on disk right now.

        Returns at most ``count`` entries, or all of them when ``count`` is
        zero or negative.
        """
        entries: list[DirEntryInfo] = []
        try:
            with os.scandir(self._name) as it:
                for entry in it:
                    if 0 < count <= len(entries):
                        break
                    try:
                        stats = entry.stat(follow_symlinks=False)
                    except FileNotFoundError:
                        continue
                    entries.append(DirEntryInfo(entry.name, stats))
        except OSError as exc:
            raise DirectoryEnumerationError(exc) from exc
        return entries

    def close(self) -> None:
        return None


class FileLoader:
    """Open real paths as :class:`File` handles, minifying CSS and JavaScript.

    Every call stats and reads the file again; nothing is cached between
    calls.
    """

    def __init__(
        self,
        registry: MinifierRegistry | None = None,
        content_type_lookup: Callable[[str], str] = content_type_for,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.content_type_lookup = content_type_lookup

    def open(self, file_name: str) -> File:
        # os.stat raises ValueError for paths with an embedded NUL byte.
        try:
            stats = os.stat(file_name)
        except (OSError, ValueError) as exc:
            raise StatError(
                f"Error getting file information for '{file_name}': {exc}", file_name, exc
            ) from exc

        if stat_module.S_ISDIR(stats.st_mode):
            return File(file_name, stats)

        try:
            with open(file_name, "rb") as f:
                original = f.read()
        except OSError as exc:
            raise ReadError(f"Error opening file '{file_name}': {exc}", file_name, exc) from exc

        content_type = self.content_type_lookup(file_name)
        contents = original
        if content_type in MINIFIED_CONTENT_TYPES:
            try:
                contents = self.registry.minify(content_type, original)
            except Exception as exc:
                raise MinifyError(f"Error minifying '{file_name}': {exc}", file_name, exc) from exc
            logger.debug(
                "Minified %s (%s): %d -> %d bytes",
                file_name,
                content_type,
                len(original),
                len(contents),
            )

        return File(file_name, stats, contents, content_type)


def open_file(file_name: str) -> File:
    """Open ``file_name`` with a loader using the default minifiers."""
    return FileLoader().open(file_name)


__all__ = [
    "MINIFIED_CONTENT_TYPES",
    "DirEntryInfo",
    "DirectoryLister",
    "File",
    "FileInfo",
    "FileLoader",
    "Reader",
    "Seeker",
    "content_type_for",
    "open_file",
]
