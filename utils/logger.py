"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.

Records go to stdout at LOG_LEVEL. When LOG_DIR is set they are also
written, at DEBUG and with line numbers, to a daily `jobly_YYYYMMDD.log`.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from config import LOG_DIR, LOG_LEVEL

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handlers: list[logging.Handler] = []


def configure_logging(level: str = LOG_LEVEL, log_dir: Optional[str] = LOG_DIR) -> None:
    """
    Attach the console (and optional file) handlers to the root logger.

    Calling it again replaces the handlers it installed before, so the
    level or log directory can be changed at runtime.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for the daily log file; empty or None disables it.
    """
    reset_logging()
    root = logging.getLogger()
    console_level = getattr(logging, level.upper(), logging.INFO)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT, _DATE_FORMAT))
    _handlers.append(console)
    root_level = console_level

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        log_file = path / f"jobly_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _DATE_FORMAT))
        _handlers.append(file_handler)
        root_level = logging.DEBUG

    for handler in _handlers:
        root.addHandler(handler)
    root.setLevel(root_level)


def reset_logging() -> None:
    """Detach and close the handlers installed by `configure_logging`."""
    root = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        root.removeHandler(handler)
        handler.close()


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    if not _handlers:
        configure_logging()
    return logging.getLogger(name)
