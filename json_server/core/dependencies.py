from __future__ import annotations

from fastapi import Request

from json_server.domain.models import ServerConfig


def get_server_config(request: Request) -> ServerConfig:
    config = getattr(request.app.state, "server_config", None)
    if config is None:
        raise RuntimeError("Server configuration has not been initialized")
    return config
