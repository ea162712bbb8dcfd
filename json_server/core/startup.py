from __future__ import annotations

import logging
from pathlib import Path

from json_server.domain.errors import ResourceIndexError, StartupError
from json_server.domain.models import ServerConfig
from json_server.storage.resource_index import build_index

logger = logging.getLogger(__name__)


def prepare_server_config(data_dir: Path) -> ServerConfig:
    """
    Verify the data directory, snapshot it into a ResourceIndex and return the shared ServerConfig.

    Raises StartupError if the directory is missing, is not a directory,
    cannot be indexed, or contains no .json files.
    """
    data_dir = Path(data_dir).expanduser()

    if not data_dir.exists():
        raise StartupError(f"data_dir does not exist: {data_dir}")
    if not data_dir.is_dir():
        raise StartupError(f"data_dir is not a directory: {data_dir}")

    try:
        index = build_index(data_dir)
    except ResourceIndexError as e:
        raise StartupError(f"Can't get json files: {e}") from e

    if index.is_empty():
        raise StartupError(f"data_dir does not contain any json files: {data_dir}")

    logger.info("data_dir contains json files: %s", list(index.names))
    return ServerConfig(data_dir=data_dir, index=index)
