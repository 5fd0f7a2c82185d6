"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"

# Third-party loggers that drown out game output at DEBUG
_NOISY_LOGGERS = ("uvicorn.access", "httpx")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Route every logger to a single stream handler.

    Calling it again replaces the previous handler instead of stacking a
    second one, so the CLI and the server lifespan can both call it.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
