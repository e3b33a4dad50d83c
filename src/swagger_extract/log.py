"""Logging configuration for swagger-extract.

Modules log through ``logging.getLogger(__name__)``; this module only
attaches handlers to the package logger.
"""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "swagger_extract"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: int = logging.WARNING,
    log_file: Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Logging level for the package logger and its handlers.
        log_file: Optional path to a log file, created with its parent directory.
        console: Whether to log to stderr. Stdout is left free for command output.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
