from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from json_server.core.dependencies import get_server_config
from json_server.domain.errors import ParseFault, ReadFault, ResourceNotFound
from json_server.domain.models import ErrorBody, ServerConfig
from json_server.storage.document_store import load_document

logger = logging.getLogger(__name__)
router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorBody(error=message).model_dump())


# ---------------------------------------------------------------------------
# 1. GET /api
# ---------------------------------------------------------------------------

@router.get("")
@router.get("/", include_in_schema=False)
async def list_resources(config: ServerConfig = Depends(get_server_config)) -> JSONResponse:
    """
    List every resource name in the startup index, in index order.
    """
    if config.index.is_empty():
        return _error(status.HTTP_404_NOT_FOUND, "not found")

    return JSONResponse(status_code=status.HTTP_200_OK, content=list(config.index.names))


# ---------------------------------------------------------------------------
# 2. GET /api/{name}
# ---------------------------------------------------------------------------

@router.get("/{name}")
async def get_resource(name: str, config: ServerConfig = Depends(get_server_config)) -> JSONResponse:
    """
    Serve the parsed body of ``<data_dir>/<name>.json``.

    ``name`` is used verbatim and must match an indexed name exactly before
    the file system is touched.
    """
    try:
        document = await load_document(config, name)
    except ResourceNotFound:
        return _error(status.HTTP_404_NOT_FOUND, "file not found")
    except ReadFault as e:
        logger.error("Failed to read indexed resource %r at %s: %s", name, e.path, e.cause)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to read file")
    except ParseFault as e:
        logger.warning("Invalid JSON in %s: %s", e.path, e.message)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)

    return JSONResponse(status_code=status.HTTP_200_OK, content=document)
