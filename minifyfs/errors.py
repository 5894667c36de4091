"""Errors raised by the minifying filesystem.

Every failure is detected where it happens and raised to the immediate caller
with the operation and path that failed.  Nothing is retried and nothing falls
back to unminified content; mapping errors to HTTP responses is left to the
serving layer (see :mod:`minifyfs.app`).
"""

from __future__ import annotations


class MinifyFSError(Exception):
    """Base class for all errors raised by this package."""


class InvalidPathError(MinifyFSError, ValueError):
    """A logical path contained a platform separator other than ``/``."""

    def __init__(self, name: str) -> None:
        super().__init__("http: invalid character in file path")
        self.name = name


class OpenError(MinifyFSError):
    """Opening a path failed.

    ``path`` is the path the failing operation was given and ``cause`` the
    wrapped exception.  Errors are re-wrapped at each layer with :meth:`wrap`
    so the kind (stat, read, minify) survives while context is added.
    """

    def __init__(self, message: str, path: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def root_cause(self) -> BaseException:
        err: BaseException = self
        while isinstance(err, OpenError) and err.cause is not None:
            err = err.cause
        return err

    def wrap(self, message: str, path: str) -> "OpenError":
        return type(self)(message, path, self)


class StatError(OpenError):
    """Filesystem metadata for a path could not be read."""


class ReadError(OpenError):
    """A file could not be read after it was successfully stat'ed."""


class MinifyError(OpenError):
    """The minifier rejected otherwise readable CSS or JavaScript."""


class MinifierNotFoundError(MinifyFSError, LookupError):
    """No minify function is registered for a content type."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"minifier does not exist for mimetype '{content_type}'")
        self.content_type = content_type


class DirectoryEnumerationError(MinifyFSError):
    """Listing a directory failed; the message is the native error's."""

    def __init__(self, cause: OSError) -> None:
        super().__init__(str(cause))
        self.cause = cause
        self.__cause__ = cause


__all__ = [
    "MinifyFSError",
    "InvalidPathError",
    "OpenError",
    "StatError",
    "ReadError",
    "MinifyError",
    "MinifierNotFoundError",
    "DirectoryEnumerationError",
]
