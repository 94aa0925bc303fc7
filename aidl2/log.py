"""
Logging configuration and utilities.

All aidl2 loggers live under the ``aidl2`` logger, which is configured once
by the command line through ``setup_logging``.
"""

from __future__ import annotations

import logging
import os

LOGGER_NAME = "aidl2"
LOG_LEVEL_ENV = "AIDL2_LOG_LEVEL"


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure logging for the aidl2 package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to $AIDL2_LOG_LEVEL, then INFO
        log_file: Optional file path for log output
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")

    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the ``aidl2`` logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
