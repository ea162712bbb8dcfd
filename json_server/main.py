import logging
import time
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from json_server import __version__
from json_server.api.resources import router as resources_router
from json_server.core.config import load_settings
from json_server.core.startup import prepare_server_config
from json_server.domain.models import ServerConfig

logger = logging.getLogger(__name__)

# HTML templates (Jinja2), shipped inside the package
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

# Plain-text body for requests that match no declared route; never JSON.
NO_ROUTE_MESSAGE = "nothing to see here"


def create_app(config: Optional[ServerConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    When ``config`` is given it is used as-is (the CLI and the tests do this).
    Otherwise the data directory is resolved from the JSON_SERVER_* environment
    variables and indexed in the startup event, which lets the module-level
    ``app`` be served directly with ``uvicorn json_server.main:app``.
    """
    app = FastAPI(
        title="JSON fixture server",
        version=__version__,
        description="Serves every <name>.json file of a data directory read-only at /api/<name>.",
    )
    app.state.server_config = config

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def trace_requests(request: Request, call_next):
        t0 = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        logger.info(
            "%s %s status=%d latency_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.on_event("startup")
    async def startup_event() -> None:
        """
        Snapshot the data directory into the resource index, unless a
        ServerConfig was supplied up front.
        """
        if app.state.server_config is None:
            settings = load_settings()
            app.state.server_config = prepare_server_config(settings.data_dir)

    @app.exception_handler(StarletteHTTPException)
    async def no_route_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods on known paths both get the
        # plain-text fallback.
        if exc.status_code in (404, 405):
            return PlainTextResponse(NO_ROUTE_MESSAGE, status_code=404)
        return await http_exception_handler(request, exc)

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        """
        Simple landing page so you can see something in a browser.
        """
        return templates.TemplateResponse(request, "index.html", {"title": "JSON fixture server"})

    @app.get("/_health_check", response_class=PlainTextResponse)
    async def health_check() -> PlainTextResponse:
        """
        Liveness probe. Performs no dependency checks.
        """
        return PlainTextResponse("ok")

    app.include_router(resources_router, prefix="/api", tags=["resources"])

    return app


app = create_app()


if __name__ == "__main__":
    """
    Allow running `python json_server/main.py` to start the Uvicorn
    development server; configuration comes from JSON_SERVER_* variables.
    """
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "json_server.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
