"""Structured logging utilities."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from backend.utils.config import Settings, get_settings


_LOGGER_INITIALIZED = False


def configure_logging(
    level: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> None:
    """Configure process-wide logging.

    The handler and pipe-separated format are installed once. Later calls that
    name a level or pass settings only adjust the root level.
    """

    global _LOGGER_INITIALIZED
    explicit = level is not None or settings is not None
    if _LOGGER_INITIALIZED and not explicit:
        return

    resolved_settings = settings or get_settings()
    resolved_level = (level or resolved_settings.log_level).upper()

    if _LOGGER_INITIALIZED:
        logging.getLogger().setLevel(resolved_level)
        return

    logging.basicConfig(
        level=resolved_level,
        format=(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        ),
        stream=sys.stdout,
    )
    # basicConfig is a no-op when the root logger already has handlers
    logging.getLogger().setLevel(resolved_level)
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger for the requested module."""
    configure_logging()
    return logging.getLogger(name)
