import re

import pytest
from rcssmin import cssmin
from rjsmin import jsmin

from minifyfs.errors import MinifierNotFoundError
from minifyfs.minifier import (
    JS_CONTENT_TYPE_PATTERN,
    MinifierRegistry,
    default_registry,
    minify_css,
    minify_js,
)


@pytest.mark.parametrize(
    "content_type",
    [
        "application/javascript",
        "application/x-javascript",
        "application/ecmascript",
        "text/javascript",
        "text/x-javascript",
        "text/ecmascript",
        "application/x-ecmascript",
    ],
)
def test_default_registry_routes_javascript_types(content_type):
    assert default_registry().lookup(content_type) is minify_js


def test_default_registry_routes_css():
    assert default_registry().lookup("text/css") is minify_css


@pytest.mark.parametrize(
    "content_type", ["Text/JavaScript", "text/javascript; charset=utf-8", "text/html", ""]
)
def test_pattern_is_case_sensitive_and_anchored(content_type):
    assert default_registry().lookup(content_type) is None


def test_minify_unknown_type_raises():
    with pytest.raises(MinifierNotFoundError) as excinfo:
        default_registry().minify("text/html", b"<p> hi </p>")
    assert excinfo.value.content_type == "text/html"


def test_minify_css_uses_rcssmin():
    source = b"body {\n    color: red;\n}\n/* gone */\n"
    result = default_registry().minify("text/css", source)
    assert result == cssmin(source.decode()).encode()
    assert b"/*" not in result
    assert len(result) < len(source)


def test_minify_js_uses_rjsmin():
    source = b"var total = 1 + 2;   // comment\n\n\nvar other  =  3;\n"
    result = default_registry().minify("text/javascript", source)
    assert result == jsmin(source.decode()).encode()
    assert b"comment" not in result


def test_minify_rejects_undecodable_input():
    with pytest.raises(UnicodeDecodeError):
        minify_css("text/css", b"body{}\xff\xfe")


def test_exact_match_wins_over_pattern():
    calls = []

    def exact(content_type, data):
        calls.append("exact")
        return data

    def pattern(content_type, data):
        calls.append("pattern")
        return data

    registry = MinifierRegistry({"text/javascript": exact}, [(JS_CONTENT_TYPE_PATTERN, pattern)])
    registry.minify("text/javascript", b"a")
    registry.minify("application/javascript", b"a")
    assert calls == ["exact", "pattern"]


def test_registry_is_not_mutated_by_extension():
    base = MinifierRegistry()
    extended = base.with_func("text/css", minify_css).with_pattern(re.compile(r"text/x-.*"), minify_js)

    assert base.lookup("text/css") is None
    assert extended.lookup("text/css") is minify_css
    assert extended.lookup("text/x-anything") is minify_js
    with pytest.raises(TypeError):
        extended.funcs["text/html"] = minify_css
