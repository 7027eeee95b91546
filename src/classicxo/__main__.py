"""Entry point for running ClassicXO via ``python -m classicxo``."""

from __future__ import annotations

import logging

import uvicorn

from . import config
from .logging_setup import setup_logging


def main() -> None:
    """Start the FastAPI-powered ClassicXO web server."""

    setup_logging()
    logging.getLogger("classicxo").info(
        "Starting ClassicXO on %s:%s", config.HOST, config.PORT
    )
    uvicorn.run(
        "classicxo.ui:app",
        host=config.HOST,
        port=config.PORT,
        reload=False,
        log_config=None,
    )


if __name__ == "__main__":
    main()
