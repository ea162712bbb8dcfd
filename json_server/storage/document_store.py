"""
Reading and parsing of the JSON documents backing the ``/api/{name}`` routes.

Loading is split into three ordered steps: an index membership check, a raw
read from disk, and a JSON parse. The membership check always runs first so
that a name which was not enumerated at startup never reaches the file system.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiofiles

from json_server.domain.errors import ParseFault, ReadFault, ResourceNotFound
from json_server.domain.models import ServerConfig

logger = logging.getLogger(__name__)


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are accepted by the json module but are not JSON.
    raise ValueError(f"Invalid JSON literal: {token}")


def ensure_indexed(config: ServerConfig, name: str) -> None:
    """Raise ResourceNotFound unless ``name`` is in the startup index."""
    if name not in config.index:
        raise ResourceNotFound(name)


async def read_document(config: ServerConfig, name: str) -> str:
    """
    Read the file backing ``name`` and decode it as UTF-8 text.

    Any failure (file removed since startup, permission denied, I/O error or
    invalid UTF-8) is raised as ReadFault.
    """
    path = config.document_path(name)
    logger.debug("path: %s", path)
    try:
        async with aiofiles.open(path, "rb") as f:
            raw = await f.read()
        return raw.decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFault(path, e) from e


def parse_document(config: ServerConfig, name: str, text: str) -> Any:
    """
    Parse ``text`` as a JSON value, raising ParseFault with the parser's message.

    Nesting deeper than the interpreter's recursion limit is reported the same way.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise ParseFault(config.document_path(name), str(e)) from e


async def load_document(config: ServerConfig, name: str) -> Any:
    """
    Return the parsed JSON document for the resource ``name``.

    Raises ResourceNotFound, ReadFault or ParseFault.
    """
    ensure_indexed(config, name)
    text = await read_document(config, name)
    return parse_document(config, name, text)
