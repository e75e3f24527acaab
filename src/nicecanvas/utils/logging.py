"""Logging helpers for nicecanvas.

Canvas modules only call `get_logger(__name__)`. Output is opt-in: the demo
in `examples/` calls `configure_logging()`, which attaches a stderr handler
to the `nicecanvas` logger. Gesture starts and commits log at INFO, per-move
and zoom updates at DEBUG, so `NICECANVAS_LOG_LEVEL=DEBUG` traces a drag.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "nicecanvas"
LOG_LEVEL_ENV = "NICECANVAS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def configure_logging(level: Optional[Union[str, int]] = None, *, force: bool = False) -> None:
    """Send nicecanvas records to stderr (the root logger is left alone).

    Args:
        level: Level name or number. Defaults to $NICECANVAS_LOG_LEVEL, else INFO.
        force: Drop existing handlers first. Without it, a second call only
            updates the level.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)

    for h in logger.handlers:
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
            h.setLevel(resolved)
            return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(logging.Formatter(DEFAULT_FMT, DEFAULT_DATEFMT))
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for `name`, or the package logger when omitted."""
    return logging.getLogger(name or LOGGER_NAME)
