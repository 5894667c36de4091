"""Serve a minifying :class:`~minifyfs.dir.Dir` over HTTP.

The base directory comes from ``MINIFYFS__ROOT``.  CSS and JavaScript are
minified on every request; everything else is served as it is on disk.
Directories redirect to their slash form and serve ``index.html`` when
present, otherwise a plain listing.
"""

import logging
import posixpath
from urllib.parse import quote

from flask import Flask, Response, redirect, request
from markupsafe import escape

from minifyfs import settings
from minifyfs.dir import Dir
from minifyfs.errors import DirectoryEnumerationError, InvalidPathError, OpenError
from minifyfs.file import File

app = Flask(__name__)
app.config["MINIFYFS_ROOT"] = settings.root()
app.config["CACHE_MAX_AGE"] = settings.cache_max_age()

site = Dir(app.config["MINIFYFS_ROOT"])


def _location(path: str) -> str:
    """Re-quote a decoded request path and keep the query string."""
    location = quote(path)
    if request.query_string:
        location += "?" + request.query_string.decode("latin-1")
    return location


def _file_response(handle: File) -> Response:
    resp = Response(handle.read(), mimetype=handle.content_type or "application/octet-stream")
    resp.last_modified = handle.mod_time
    max_age = app.config["CACHE_MAX_AGE"]
    if max_age > 0:
        resp.cache_control.public = True
        resp.cache_control.max_age = max_age
    return resp.make_conditional(request)


def _listing_response(handle: File) -> Response:
    rows = []
    for entry in sorted(handle.readdir(), key=lambda e: e.name):
        name = entry.name + "/" if entry.is_dir else entry.name
        rows.append(f'<a href="{escape(quote(name))}">{escape(name)}</a>')
    body = "<pre>\n" + "".join(row + "\n" for row in rows) + "</pre>\n"
    return Response(body, mimetype="text/html")


@app.get("/", defaults={"name": ""})
@app.get("/<path:name>")
def serve(name: str):
    """Serve one entry of the virtual hierarchy."""
    handle = site.open(name)
    with handle:
        if not handle.is_dir:
            if request.path.endswith("/"):
                return redirect(_location(request.path.rstrip("/")), code=301)
            return _file_response(handle)

        if not request.path.endswith("/"):
            return redirect(_location(request.path + "/"), code=301)

        try:
            index = site.open(posixpath.join(name, "index.html"))
        except OpenError as exc:
            app.logger.debug("No index for %s: %s", request.path, exc)
        else:
            with index:
                if not index.is_dir:
                    return _file_response(index)

        return _listing_response(handle)


@app.errorhandler(InvalidPathError)
def handle_invalid_path(error):
    app.logger.warning("400 Bad Request: path=%s reason=%s", request.path, error)
    return "400 Bad Request", 400


@app.errorhandler(OpenError)
def handle_open_error(error):
    cause = error.root_cause
    if isinstance(cause, (FileNotFoundError, NotADirectoryError)):
        app.logger.warning("404 Not Found: path=%s reason=%s", request.path, error)
        return "404 page not found", 404
    if isinstance(cause, PermissionError):
        app.logger.warning("403 Forbidden: path=%s reason=%s", request.path, error)
        return "403 Forbidden", 403
    app.logger.error("500 Internal Server Error: path=%s reason=%s", request.path, error)
    return "500 Internal Server Error", 500


@app.errorhandler(DirectoryEnumerationError)
def handle_listing_error(error):
    app.logger.error("500 Internal Server Error: path=%s reason=%s", request.path, error)
    return "500 Internal Server Error", 500


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level())
    host, port = settings.bind()
    app.run(host=host, port=port, debug=settings.debug())
