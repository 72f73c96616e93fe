"""Logging setup for sift.

Every record under the ``sift`` logger goes to a rotating file in the
platform log directory. Library modules log through
``logging.getLogger(__name__)`` and reach that file because they all live
under the ``sift`` package. ``enable_console_logging`` also mirrors records
to stderr through Rich, for the ``--verbose`` flag.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir
from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "sift"
LOG_FILE_NAME = "sift.log"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(LOGGER_NAME)) / LOG_FILE_NAME


def _file_handler(path: Path) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def get_logger() -> logging.Logger:
    """Return the ``sift`` logger, attaching its file handler on first call."""
    global _logger
    if _logger is None:
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG)
        if not logger.handlers:
            logger.addHandler(_file_handler(log_file_path()))
        # Keep records out of the root logger; the CLI owns stderr.
        logger.propagate = False
        _logger = logger
    return _logger


def enable_console_logging(level: int = logging.DEBUG) -> None:
    """Mirror log records at ``level`` and above to stderr."""
    logger = get_logger()
    if any(isinstance(handler, RichHandler) for handler in logger.handlers):
        return
    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setLevel(level)
    logger.addHandler(handler)
