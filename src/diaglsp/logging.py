"""Logging configuration for diaglsp."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAMESPACE = "diaglsp"

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(*, level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configure the diaglsp logger tree.

    stdout carries the LSP stream in stdio mode, so records go to stderr
    unless a log file is given.

    Args:
        level: Log level name, case insensitive. Unknown names fall back to INFO.
        log_file: Optional path to a log file.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(log_level)

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
    handler.setLevel(log_level)
    logger.addHandler(handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return the ``diaglsp.<name>`` logger."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
