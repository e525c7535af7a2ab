"""Logging configuration."""

import logging
import os
from typing import Optional

ROOT_LOGGER = "hostscan"
DEFAULT_LEVEL = os.environ.get("HOSTSCAN_LOG_LEVEL", "WARNING").upper()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a configured logger instance."""
    logger = logging.getLogger(name or ROOT_LOGGER)

    # Only configure if no handlers exist
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(DEFAULT_LEVEL)
        # Keep diagnostics off the root logger
        logger.propagate = False

    return logger


def set_level(level: int) -> None:
    """Apply a level to every hostscan diagnostic logger created so far."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if not isinstance(logger, logging.Logger):
            continue
        if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
            # Report log sinks manage their own level
            if name.startswith(ROOT_LOGGER + ".report."):
                continue
            logger.setLevel(level)
