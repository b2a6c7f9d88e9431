"""Logging setup for the fulfillment service."""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "fulfillment"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class LoggingConfig:
    """Attach a single stdout handler to the package logger."""

    def __init__(self, level: str = "INFO") -> None:
        self.level = level.upper()
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        logger.setLevel(self.level)
        if not any(getattr(h, "_fulfillment", False) for h in logger.handlers):
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            handler._fulfillment = True  # type: ignore[attr-defined]
            logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
