"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from typing import Tuple


def _env(name: str, default: str) -> str:
    value = os.environ.get(name)
    if value is not None and value.strip():
        return value.strip()
    return default


HOST: str = _env("CLASSICXO_HOST", "0.0.0.0")
PORT: int = int(_env("CLASSICXO_PORT", "8000"))
LOG_LEVEL: str = _env("CLASSICXO_LOG_LEVEL", "INFO").upper()

# Pause before the bot replies, in seconds (min, max)
AI_THINK_DELAY: Tuple[float, float] = (
    float(_env("CLASSICXO_AI_DELAY_MIN", "0.5")),
    float(_env("CLASSICXO_AI_DELAY_MAX", "1.0")),
)
