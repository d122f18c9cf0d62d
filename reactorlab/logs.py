"""Logging utilities for the reactor lab."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGERS: dict[str, logging.Logger] = {}


def get_logger(name: str = "reactorlab", level: str | int | None = None) -> logging.Logger:
    """Return a cached logger with a single stream handler."""
    if name in _LOGGERS:
        logger = _LOGGERS[name]
        if level is not None:
            logger.setLevel(level)
        return logger

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    if level is None:
        from .config import settings

        level = settings.log_level
    logger.setLevel(level)
    logger.propagate = False

    _LOGGERS[name] = logger
    return logger


def reset_logger(name: str) -> None:
    """Remove cached loggers, useful for testing."""
    existing: Optional[logging.Logger] = _LOGGERS.pop(name, None)
    if existing:
        for handler in list(existing.handlers):
            existing.removeHandler(handler)
            handler.close()
