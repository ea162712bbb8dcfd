"""
Command-line entry point: ``json-server [--port PORT] [--data-dir DIR]``.

Resolves settings, configures logging, snapshots the data directory and runs
the application under uvicorn. A missing data directory or one without any
.json files is fatal and ends the process with exit status 1.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from json_server import __version__
from json_server.core.config import ServerSettings, load_settings
from json_server.core.startup import prepare_server_config
from json_server.domain.errors import StartupError
from json_server.main import create_app

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-server",
        description=(
            "Serve the .json files of a directory as a read-only HTTP API. "
            "e.g. data/users.json is served at /api/users."
        ),
    )
    parser.add_argument("-p", "--port", type=int, default=None, help="Port to listen on (default 3000)")
    parser.add_argument(
        "-d",
        "--data-dir",
        dest="data_dir",
        default=None,
        help="Path to the data directory containing the .json files to serve (default ./data)",
    )
    parser.add_argument("--host", default=None, help="Interface to bind (default 127.0.0.1)")
    parser.add_argument("--log-level", dest="log_level", default=None, help="Logging level (default INFO)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(settings: ServerSettings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(vars(args))
    except ValidationError as e:
        parser.error(str(e))

    configure_logging(settings)

    try:
        config = prepare_server_config(settings.data_dir)
    except StartupError as e:
        logger.error("%s", e)
        return 1

    app = create_app(config)

    logger.info("listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
