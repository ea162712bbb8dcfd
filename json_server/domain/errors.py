"""
Exception types raised by the index builder, the startup step and the document store.
"""

from __future__ import annotations

from pathlib import Path


class JsonServerError(Exception):
    """Base class for all errors raised by json_server."""


class ResourceIndexError(JsonServerError):
    """The data directory could not be enumerated into a resource index."""


class StartupError(JsonServerError):
    """The server cannot start with the configured data directory."""


class ResourceNotFound(JsonServerError):
    """The requested name is not part of the resource index."""

    def __init__(self, name: str):
        super().__init__(f"resource not in index: {name!r}")
        self.name = name


class ReadFault(JsonServerError):
    """
    An indexed resource could not be read from disk.

    Raised when the file was removed, became unreadable or is not valid UTF-8
    after the index was built. The path and the cause are kept for logging
    and never sent to the client.
    """

    def __init__(self, path: Path, cause: Exception):
        super().__init__(f"failed to read {path}: {cause}")
        self.path = path
        self.cause = cause


class ParseFault(JsonServerError):
    """An indexed resource was read but does not contain valid JSON."""

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path
        self.message = message
