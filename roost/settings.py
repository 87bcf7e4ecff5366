"""Framework-wide defaults: log levels, static file locations and protocol switches."""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    "LogLevel",
    "DEFAULT_LOG_LEVEL",
    "ENABLE_LOGGING",
    "ENFORCE_WS_SPEC",
    "STATIC_DIRECTORY",
    "STATIC_ENDPOINT",
    "normalize_static_dir",
]


class LogLevel(IntEnum):
    """Severity of a log message; higher values are more severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


DEFAULT_LOG_LEVEL = LogLevel.INFO
ENABLE_LOGGING = True
# Only accept masked websocket frames from clients (RFC 6455, sections 5.2 and 6.1).
ENFORCE_WS_SPEC = False

STATIC_DIRECTORY = "static/"
STATIC_ENDPOINT = "/static/<path>"


def normalize_static_dir(path: str) -> str:
    """Return *path* with backslashes turned into slashes and a trailing slash.

    Raises ValueError for an empty path.
    """
    if not path:
        raise ValueError("static directory must not be empty")
    normalized = path.replace("\\", "/")
    if not normalized.endswith("/"):
        normalized += "/"
    return normalized