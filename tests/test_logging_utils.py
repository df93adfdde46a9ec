"""Tests for the logging utilities module."""

import logging
import sys
import time
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from styledtext.logging_utils import ConsoleFormatter, FileFormatter, setup_logging


def _record(name: str = "test", level: int = logging.INFO, msg: str = "Test", lineno: int = 1) -> logging.LogRecord:
    return logging.LogRecord(name=name, level=level, pathname="test.py", lineno=lineno, msg=msg, args=(), exc_info=None)


class TestConsoleFormatter(unittest.TestCase):
    """Test suite for ConsoleFormatter class."""

    def test_console_formatter_includes_version(self) -> None:
        """1. Initialization: Uses UTC, the ISO date format and the version."""
        formatter = ConsoleFormatter("1.0.0")

        assert formatter.datefmt == "%Y-%m-%dT%H:%M:%S"
        assert formatter.converter == time.gmtime
        assert "StyledText - 1.0.0" in formatter.format(_record())

    def test_console_formatter_format_time_with_microseconds(self) -> None:
        """2. Time Format: Formats time with 6-digit microseconds and 'Z' suffix."""
        formatter = ConsoleFormatter("1.0.0")
        record = _record()
        record.created = 1234567890.25

        formatted_time = formatter.formatTime(record, formatter.datefmt)

        assert formatted_time == "2009-02-13T23:31:30.250000Z"

    def test_console_formatter_message_format(self) -> None:
        """3. Message Format: Timestamp, version and message are separated by pipes."""
        formatter = ConsoleFormatter("2.0.0")
        record = _record(msg="Test log message")
        record.created = 1234567890.5

        formatted = formatter.format(record)

        assert formatted == "2009-02-13T23:31:30.500000Z | StyledText - 2.0.0 | Test log message"


class TestFileFormatter(unittest.TestCase):
    """Test suite for FileFormatter class."""

    def test_file_formatter_detailed_format(self) -> None:
        """1. Detailed Format: Includes logger name, function name, line number and level."""
        formatter = FileFormatter()
        record = _record(name="styledtext.search", level=logging.DEBUG, msg="Detailed log", lineno=123)
        record.funcName = "iter_matches"
        record.created = 1234567890.0

        formatted = formatter.format(record)

        assert "styledtext.search" in formatted
        assert "iter_matches" in formatted
        assert "123" in formatted
        assert "DEBUG" in formatted
        assert formatted.endswith("| Detailed log")

    def test_file_formatter_format_time_with_microseconds(self) -> None:
        """2. Time Format: Formats time with 6-digit microseconds and 'Z' suffix."""
        formatter = FileFormatter()
        record = _record()
        record.created = 9876543210.654321

        microseconds_part = formatter.formatTime(record, formatter.datefmt).split(".")[-1]

        assert microseconds_part.endswith("Z")
        assert len(microseconds_part.rstrip("Z")) == 6


class TestSetupLogging(unittest.TestCase):
    """Test suite for setup_logging function."""

    def tearDown(self) -> None:
        """Clean up logging state after each test."""
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.WARNING)

    def test_setup_logging_default_mode(self) -> None:
        """1. Default Mode: INFO level, a single console handler on stderr."""
        setup_logging("1.0.0")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.INFO
        assert len(root_logger.handlers) == 1
        handler = root_logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert isinstance(handler.formatter, ConsoleFormatter)

    def test_setup_logging_debug_without_file(self) -> None:
        """2. Debug Without File: DEBUG level, console only."""
        with patch("styledtext.logging_utils.FileHandler") as mock_file_handler:
            setup_logging("1.0.0", debug=True)

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert root_logger.handlers[0].level == logging.DEBUG
        mock_file_handler.assert_not_called()

    def test_setup_logging_debug_with_file(self) -> None:
        """3. Debug With File: Adds a file handler using FileFormatter."""
        log_file = Path("/mock/log/dir/debug.log")
        mock_handler_instance = MagicMock()
        mock_handler_instance.level = logging.DEBUG

        with patch("pathlib.Path.mkdir") as mock_mkdir, patch("styledtext.logging_utils.FileHandler", return_value=mock_handler_instance) as mock_file_handler:
            setup_logging("1.0.0", debug=True, log_file=log_file)

        mock_mkdir.assert_called_once_with(parents=True, exist_ok=True)
        mock_file_handler.assert_called_once_with(log_file, mode="w", encoding="utf-8")
        mock_handler_instance.setLevel.assert_called_once_with(logging.DEBUG)
        formatter_arg = mock_handler_instance.setFormatter.call_args[0][0]
        assert isinstance(formatter_arg, FileFormatter)
        assert mock_handler_instance in logging.getLogger().handlers

    def test_setup_logging_file_ignored_without_debug(self) -> None:
        """4. File Without Debug: The log file is only written in debug mode."""
        with patch("styledtext.logging_utils.FileHandler") as mock_file_handler:
            setup_logging("1.0.0", log_file=Path("/mock/debug.log"))

        mock_file_handler.assert_not_called()

    def test_setup_logging_debug_file_handler_failure(self) -> None:
        """5. File Handler Failure: Continues with console logging if file creation fails."""
        with patch("styledtext.logging_utils.FileHandler", side_effect=OSError("Permission denied")), patch("pathlib.Path.mkdir"):
            setup_logging("1.0.0", debug=True, log_file=Path("/mock/debug.log"))

        root_logger = logging.getLogger()
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], logging.StreamHandler)

    def test_setup_logging_clears_existing_handlers(self) -> None:
        """6. Handler Cleanup: Clears existing handlers before setup."""
        root_logger = logging.getLogger()
        dummy_handler = logging.StreamHandler()
        root_logger.addHandler(dummy_handler)

        setup_logging("1.0.0")

        assert dummy_handler not in root_logger.handlers
        assert len(root_logger.handlers) == 1

    def test_setup_logging_multiple_calls_idempotent(self) -> None:
        """7. Idempotency: Multiple calls clear old handlers and set up fresh ones."""
        setup_logging("1.0.0")
        setup_logging("1.0.0")

        assert len(logging.getLogger().handlers) == 1


if __name__ == "__main__":
    unittest.main()
