"""Environment-driven settings.

Values are looked up with ``minifyfs.foo`` style names which map to
``MINIFYFS__FOO`` environment variables.  Settings are read when the
functions are called, so tests can change the environment and reload.
"""

from __future__ import annotations

import os


def _env(name: str, default: str | None = None) -> str | None:
    """Fetch configuration values using ``minifyfs.foo`` style names.

    Environment variables use ``MINIFYFS__FOO`` to mirror nested configuration
    (similar to how libraries like Dynaconf expose settings).
    """

    return os.getenv(name.replace(".", "__").upper(), default)


def root() -> str:
    """Base directory of the served hierarchy; empty means the working directory."""
    return _env("minifyfs.root", "") or ""


def cache_max_age() -> int:
    """``max-age`` for ``Cache-Control`` on served files; ``0`` sends no header."""
    return int(_env("minifyfs.cache_max_age", "0") or "0")


def log_level() -> str:
    return (_env("minifyfs.log_level", "INFO") or "INFO").upper()


def bind() -> tuple[str, int]:
    host, port = os.environ.get("BIND", "0.0.0.0:5000").rsplit(":", 1)
    return host, int(port)


def debug() -> bool:
    return os.environ.get("DEBUG", "").lower() in {"1", "true", "yes"}


__all__ = ["root", "cache_max_age", "log_level", "bind", "debug"]
