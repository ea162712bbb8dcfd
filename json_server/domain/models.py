"""
Pydantic models for the JSON fixture server.

This module defines the data models shared by the index builder, the
document store and the HTTP layer:
- The resource index (the startup snapshot of servable names)
- The server configuration handed to every request handler
- The structured error body returned by the data API

All shared models are frozen: they are built once at startup and then only
read, so request handlers can use them concurrently without locking.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Resource Index
# ---------------------------------------------------------------------------


class ResourceIndex(BaseModel):
    """
    Ordered, immutable snapshot of the resource names found in the data directory.

    A name is present if and only if a file named ``<name>.json`` existed
    directly inside the data directory when the index was built. Order follows
    the directory enumeration order and is not guaranteed to be sorted.
    """

    model_config = ConfigDict(frozen=True)

    names: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Resource names (file stems) in directory enumeration order.",
    )

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)

    def is_empty(self) -> bool:
        return not self.names


# ---------------------------------------------------------------------------
# Server Configuration
# ---------------------------------------------------------------------------


class ServerConfig(BaseModel):
    """
    Shared, read-only state for the resource server.

    Holds the base data directory and the resource index built from it.
    Stored on ``app.state`` and injected into handlers via
    ``json_server.core.dependencies.get_server_config``.
    """

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(
        description="Directory the resource files are read from. Trailing separators are normalized away.",
    )
    index: ResourceIndex = Field(
        default_factory=ResourceIndex,
        description="Startup snapshot of the servable resource names.",
    )

    def document_path(self, name: str) -> Path:
        """Return the on-disk path backing the resource ``name``."""
        return self.data_dir / f"{name}.json"


# ---------------------------------------------------------------------------
# API Response Models
# ---------------------------------------------------------------------------


class ErrorBody(BaseModel):
    """Structured error payload returned by the ``/api`` routes."""

    error: str = Field(description="Human-readable error message.")
