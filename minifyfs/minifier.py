"""CSS and JavaScript minification dispatch.

The actual minification is done by ``rcssmin`` and ``rjsmin``.  This module
only decides which of them handles a given content type.  Registries are
built explicitly and never change after construction so a loader can be
given a different table (for instance a mock in tests) without touching
global state.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from rcssmin import cssmin
from rjsmin import jsmin

from minifyfs.errors import MinifierNotFoundError

MinifyFunc = Callable[[str, bytes], bytes]

# Matches every JavaScript content type in common use, e.g. ``text/javascript``
# and ``application/x-ecmascript``.  Case-sensitive.
JS_CONTENT_TYPE_PATTERN = r"(application|text)/(x-)?(java|ecma)script"


def minify_css(content_type: str, data: bytes) -> bytes:
    return cssmin(data.decode("utf-8")).encode("utf-8")


def minify_js(content_type: str, data: bytes) -> bytes:
    return jsmin(data.decode("utf-8")).encode("utf-8")


class MinifierRegistry:
    """Immutable mapping from content types to minify functions.

    Exact content types are checked before patterns; patterns are tried in
    the order given and must match the whole content type.
    """

    def __init__(
        self,
        funcs: Mapping[str, MinifyFunc] | None = None,
        patterns: Iterable[tuple[str | re.Pattern, MinifyFunc]] = (),
    ) -> None:
        self._funcs = MappingProxyType(dict(funcs or {}))
        self._patterns = tuple((re.compile(p), func) for p, func in patterns)

    @property
    def funcs(self) -> Mapping[str, MinifyFunc]:
        return self._funcs

    @property
    def patterns(self) -> tuple[tuple[re.Pattern, MinifyFunc], ...]:
        return self._patterns

    def with_func(self, content_type: str, func: MinifyFunc) -> "MinifierRegistry":
        funcs = dict(self._funcs)
        funcs[content_type] = func
        return MinifierRegistry(funcs, self._patterns)

    def with_pattern(self, pattern: str | re.Pattern, func: MinifyFunc) -> "MinifierRegistry":
        return MinifierRegistry(self._funcs, self._patterns + ((pattern, func),))

    def lookup(self, content_type: str) -> MinifyFunc | None:
        func = self._funcs.get(content_type)
        if func is not None:
            return func
        for regex, func in self._patterns:
            if regex.fullmatch(content_type):
                return func
        return None

    def minify(self, content_type: str, data: bytes) -> bytes:
        func = self.lookup(content_type)
        if func is None:
            raise MinifierNotFoundError(content_type)
        return func(content_type, data)


def default_registry() -> MinifierRegistry:
    """Return a registry handling CSS and every JavaScript content type."""
    return MinifierRegistry(
        {"text/css": minify_css},
        [(JS_CONTENT_TYPE_PATTERN, minify_js)],
    )


__all__ = [
    "JS_CONTENT_TYPE_PATTERN",
    "MinifierRegistry",
    "MinifyFunc",
    "default_registry",
    "minify_css",
    "minify_js",
]
