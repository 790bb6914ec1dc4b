"""
Package-wide logging helpers.

The package logger carries a NullHandler so that importing numsep never
prints warnings when the application has not configured logging.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

PACKAGE_LOGGER_NAME = "numsep"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Returns a logger scoped to numsep (the package logger by default)."""
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: IO[str] | None = None,
    fmt: str | None = None,
) -> logging.Logger:
    """
    Installs a single stream handler on the package logger.

    Level names are case-insensitive; unknown names fall back to INFO.
    Calling this again replaces the previously installed stream handler.
    """
    logger = get_logger()

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, logging.StreamHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        logging.Formatter(fmt or "%(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    return logger
