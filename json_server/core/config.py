from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

DATA_DIR_ENV_VAR = "JSON_SERVER_DATA_DIR"
PORT_ENV_VAR = "JSON_SERVER_PORT"
HOST_ENV_VAR = "JSON_SERVER_HOST"
LOG_LEVEL_ENV_VAR = "JSON_SERVER_LOG_LEVEL"

_ENV_FIELDS = {
    "data_dir": DATA_DIR_ENV_VAR,
    "port": PORT_ENV_VAR,
    "host": HOST_ENV_VAR,
    "log_level": LOG_LEVEL_ENV_VAR,
}


class ServerSettings(BaseModel):
    """
    Process-level settings for the JSON fixture server.

    Resolved from (highest priority first) command-line flags, JSON_SERVER_*
    environment variables and the defaults below.
    """

    data_dir: Path = Field(
        default=Path("./data"),
        description="Directory whose .json files are served under /api.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="TCP port to listen on.",
    )
    host: str = Field(
        default="127.0.0.1",
        description="Interface to bind.",
    )
    log_level: str = Field(
        default="INFO",
        description="Name of the root logging level (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level


def load_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ServerSettings:
    """
    Build ServerSettings from the environment, then apply ``overrides``.

    Override values of None are ignored so argparse namespaces can be passed
    through directly.
    """
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    for field, var in _ENV_FIELDS.items():
        env_value = env.get(var)
        if env_value:
            values[field] = env_value

    for field, value in (overrides or {}).items():
        if value is not None and field in ServerSettings.model_fields:
            values[field] = value

    return ServerSettings(**values)
