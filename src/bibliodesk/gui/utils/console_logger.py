"""Console logging for the GUI and CLI entry points."""

from __future__ import annotations

import logging
import sys
from typing import Union

PACKAGE_LOGGER = "bibliodesk"
CONSOLE_HANDLER = "bibliodesk-console"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return value


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str = CONSOLE_HANDLER,
    *,
    level: Union[int, str] = logging.INFO,
) -> logging.Handler:
    """Attach one named stdout handler to *logger* and return it.

    Calling again with the same name only updates the level.
    """
    numeric = _coerce_level(level)
    for handler in logger.handlers:
        if getattr(handler, "name", None) == handler_name:
            handler.setLevel(numeric)
            logger.setLevel(numeric)
            return handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric)
    handler.name = handler_name
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    return handler


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    ensure_console_logger(logger, level=level)
    return logger


__all__ = ["configure_logging", "ensure_console_logger"]
