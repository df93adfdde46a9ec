"""Custom logging utilities for the StyledText command-line tool."""
# src/styledtext/logging_utils.py

import logging
import sys
import time
from logging import FileHandler
from pathlib import Path


class _UtcFormatter(logging.Formatter):
    """Base formatter stamping records in UTC with microsecond precision."""

    def __init__(self, fmt: str) -> None:
        super().__init__(fmt=fmt, datefmt="%Y-%m-%dT%H:%M:%S")
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt, ct) if datefmt else time.strftime(self.default_time_format, ct)
        # Calculate microseconds from the fractional part of `created`
        microseconds = int((record.created - int(record.created)) * 1_000_000)
        return f"{s}.{microseconds:06d}Z"


# Console Log Formatter
class ConsoleFormatter(_UtcFormatter):
    """A custom formatter for console output to provide clean, user-friendly logs."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the application version.

        Args:
            version: The StyledText version.

        """
        super().__init__(f"%(asctime)s | StyledText - {version} | %(message)s")


# File Log Formatter
class FileFormatter(_UtcFormatter):
    """A detailed formatter for debug log files, aimed at developers."""

    def __init__(self) -> None:
        """Initialize the detailed file formatter."""
        super().__init__("%(asctime)s | %(name)-28s | %(funcName)-20s:%(lineno)-4d | %(levelname)-8s | %(message)s")


def setup_logging(version: str, *, debug: bool = False, log_file: Path | None = None) -> None:
    """
    Configure the root logger for the StyledText command-line tool.

    1.  Console: messages go to stderr so that stdout stays free for command
        output. Level is INFO by default, DEBUG if debug=True.
    2.  File (DEBUG): detailed logs written to ``log_file`` when debug=True and a
        path is given.

    Args:
        version: The application version, included in console logs.
        debug: If True, sets console level to DEBUG and enables the log file.
        log_file: Where to write the debug log.

    """
    root_logger = logging.getLogger()
    # Clear any handlers created by basicConfig or previous setups
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    console_level = logging.DEBUG if debug else logging.INFO
    root_logger.setLevel(console_level)

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    if debug and log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)

            # --- File Handler (DEBUG) ---
            file_handler = FileHandler(log_file, mode="w", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(FileFormatter())
            root_logger.addHandler(file_handler)

            logging.getLogger().info(
                "Debug mode enabled. Console level set to DEBUG. Detailed logs will be written to %s",
                log_file,
            )
        except OSError:
            # If creating the log file fails, we should still continue with console logging.
            logging.getLogger().exception("Failed to create debug log file. Continuing with console logging only.")
