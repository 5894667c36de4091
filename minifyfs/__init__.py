"""Read-only virtual filesystem that minifies CSS and JavaScript on access."""

from minifyfs.dir import Dir
from minifyfs.errors import (
    DirectoryEnumerationError,
    InvalidPathError,
    MinifierNotFoundError,
    MinifyError,
    MinifyFSError,
    OpenError,
    ReadError,
    StatError,
)
from minifyfs.file import DirEntryInfo, File, FileInfo, FileLoader, open_file
from minifyfs.minifier import MinifierRegistry, default_registry

__all__ = [
    "Dir",
    "DirEntryInfo",
    "DirectoryEnumerationError",
    "File",
    "FileInfo",
    "FileLoader",
    "InvalidPathError",
    "MinifierNotFoundError",
    "MinifierRegistry",
    "MinifyError",
    "MinifyFSError",
    "OpenError",
    "ReadError",
    "StatError",
    "default_registry",
    "open_file",
]
