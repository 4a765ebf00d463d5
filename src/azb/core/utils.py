"""Logging helpers for azb."""

import logging
import os
import sys
from logging import Handler
from logging.handlers import RotatingFileHandler
from typing import Optional

from azb.core.paths import AzbPaths

LOGGER_NAME = "azb"


_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _level_from_name(name: str) -> int:
    return _LEVEL_MAP.get(name.upper(), logging.WARNING)


def _get_log_level() -> int:
    """Get log level from AZB_LOG_LEVEL environment variable.

    Supports: DEBUG, INFO, WARNING, ERROR, CRITICAL (case-insensitive).
    Defaults to WARNING if not set or invalid.

    Returns:
        Logging level constant
    """
    return _level_from_name(os.environ.get("AZB_LOG_LEVEL", "WARNING"))


def setup_logger(
    console_level: Optional[str] = None,
    log_to_file: bool = True,
    max_bytes: int = 1024 * 1024,  # 1MB
    backup_count: int = 3,
) -> logging.Logger:
    """Set up the azb logger with a console handler and a rotating log file.

    The console handler writes to stderr so that command output on stdout
    stays clean for scripting. The file handler always captures DEBUG,
    including every az command line that was dispatched.

    Args:
        console_level: Console level name; defaults to AZB_LOG_LEVEL or WARNING
        log_to_file: If False, skip the file handler
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers to avoid duplicates
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    file_handler: Optional[Handler] = None
    if log_to_file:
        log_file = AzbPaths.get_log_file()
        try:
            AzbPaths.ensure_directories()
            file_handler = RotatingFileHandler(
                log_file, maxBytes=max_bytes, backupCount=backup_count, mode="a"
            )
        except OSError as e:
            sys.stderr.write(f"Warning: cannot open log file {log_file}: {e}\n")

        if file_handler is not None:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_level_from_name(console_level) if console_level else _get_log_level())
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    logger.debug("azb logger initialized (pid=%d)", os.getpid())
    return logger


def get_logger() -> logging.Logger:
    """Get the azb package logger."""
    return logging.getLogger(LOGGER_NAME)
