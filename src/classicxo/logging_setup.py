import logging
from typing import Optional

from . import config


def setup_logging(level: Optional[str] = None) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel((level or config.LOG_LEVEL).upper())

    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(fmt)
    root.addHandler(stream_handler)

    # Per-request access lines are noise next to game events
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
