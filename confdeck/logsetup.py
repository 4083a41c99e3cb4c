"""Logging to a file in the data directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from confdeck.config import PROJECT_NAME, get_data_dir

LOG_ENV = f"{PROJECT_NAME}_LOG_LEVEL"
LOG_FILE = "confdeck.log"
_LOGGER_NAME = "confdeck"

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 10,
}


def _level_from_env() -> int:
    raw = os.environ.get(LOG_ENV, "").strip().lower()
    if not raw:
        return logging.INFO
    try:
        return _LEVELS[raw]
    except KeyError:
        raise ValueError(f"invalid log level in {LOG_ENV}: {raw!r}") from None


def init_logging() -> Path:
    """Send the package's log records to a fresh log file; returns its path."""
    level = _level_from_env()
    directory = get_data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / LOG_FILE
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(filename)s:%(lineno)d: %(message)s")
    )
    logger = logging.getLogger(_LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return path