"""Tests for logging helpers."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

from azb.core.utils import LOGGER_NAME, get_logger, setup_logger


def test_setup_logger(tmp_path: Path) -> None:
    """Test logger setup with a temp data directory."""
    with patch.dict(os.environ, {"AZB_DATA_DIR": str(tmp_path)}):
        logger = setup_logger()

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG

        # Check log file was created under the data directory
        log_file = tmp_path / "logs" / "azb.log"
        assert log_file.exists()

        # File handler plus console handler
        assert len(logger.handlers) == 2


def test_setup_logger_file_receives_debug(tmp_path: Path) -> None:
    """Test that DEBUG records reach the log file."""
    with patch.dict(os.environ, {"AZB_DATA_DIR": str(tmp_path)}):
        logger = setup_logger()
        logging.getLogger("azb.core.gate").debug("Dispatching: az boards query")
        for handler in logger.handlers:
            handler.flush()

        content = (tmp_path / "logs" / "azb.log").read_text()
        assert "Dispatching: az boards query" in content


def test_setup_logger_without_file() -> None:
    """Test console-only logging."""
    logger = setup_logger(console_level="ERROR", log_to_file=False)
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.ERROR


def test_console_level_from_environment() -> None:
    with patch.dict(os.environ, {"AZB_LOG_LEVEL": "debug"}):
        logger = setup_logger(log_to_file=False)
    assert logger.handlers[0].level == logging.DEBUG


def test_invalid_console_level_defaults_to_warning() -> None:
    with patch.dict(os.environ, {"AZB_LOG_LEVEL": "chatty"}):
        logger = setup_logger(log_to_file=False)
    assert logger.handlers[0].level == logging.WARNING


def test_setup_logger_repeated_calls_do_not_duplicate() -> None:
    setup_logger(log_to_file=False)
    logger = setup_logger(log_to_file=False)
    assert len(logger.handlers) == 1


def test_unwritable_log_dir_falls_back_to_console(tmp_path: Path) -> None:
    """Test that a log file that cannot be opened does not break the CLI."""
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with patch.dict(os.environ, {"AZB_DATA_DIR": str(blocker)}):
        logger = setup_logger()
    assert len(logger.handlers) == 1


def test_get_logger() -> None:
    """Test get_logger returns the package logger."""
    assert get_logger() is logging.getLogger(LOGGER_NAME)
