"""Logging utilities for the bnm_rates_bot package."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_LOGGER: Optional[logging.Logger] = None
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = "bnm_rates_bot") -> logging.Logger:
    """Return a module-level logger configured with a simple formatter."""
    global _LOGGER
    if _LOGGER is None:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stdout)
        _LOGGER = logging.getLogger("bnm_rates_bot")
    return logging.getLogger(name)


def set_log_level(level: str | int) -> None:
    """Adjust the package log level, e.g. from ``--log-level`` or ``BOT_LOG_LEVEL``."""

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    get_logger().setLevel(level)


__all__ = ["get_logger", "set_log_level", "LOG_FORMAT"]
