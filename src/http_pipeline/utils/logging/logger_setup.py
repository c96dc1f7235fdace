"""Logger setup for the pipeline.

Middleware take an injected ``logging.Logger`` and fall back to
``get_logger(component)``. Nothing here is required for the middleware to
work: configure_logging only attaches handlers to the package logger so
that a standalone server (see the CLI) has somewhere to write.

Logging destinations once configured:
- stderr (console): human-readable, ``LEVEL: message``
- File (optional): JSONL with ISO 8601 timestamps
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_logging",
    "get_logger",
    "trace",
]

import logging
import sys
from pathlib import Path
from typing import Any

from http_pipeline.constants import APP_NAME, TRACE_LEVEL
from http_pipeline.utils.logging.iso_formatter import ISO8601Formatter

logging.addLevelName(TRACE_LEVEL, "TRACE")


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts 'message' or 'event' field from dict messages for cleaner stderr output.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human-readable console output.

        Args:
            record: The log record to format.

        Returns:
            str: Formatted log message with level prefix.
        """
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


def get_logger(component: str) -> logging.Logger:
    """Return the package logger for a component (e.g. "middleware.logging")."""
    return logging.getLogger(f"{APP_NAME}.{component}")


def trace(logger: logging.Logger, msg: Any, *args: Any) -> None:
    """Log msg at TRACE level (finer than DEBUG)."""
    if logger.isEnabledFor(TRACE_LEVEL):
        logger.log(TRACE_LEVEL, msg, *args)


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    name = level.upper()
    if name == "TRACE":
        return TRACE_LEVEL
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(level: str | int = logging.INFO, log_file: Path | None = None) -> logging.Logger:
    """Attach console (and optionally JSONL file) handlers to the package logger.

    Safe to call more than once: previous handlers are closed and replaced.

    Args:
        level: Level name ("TRACE", "DEBUG", ...) or number.
        log_file: Optional JSONL log path. The parent directory is created.

    Returns:
        logging.Logger: The configured package logger.

    Raises:
        ValueError: If level is not a known level name.
        OSError: If the log directory or file cannot be created.
    """
    numeric_level = _parse_level(level)

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(numeric_level)
    logger.propagate = False

    # Close and remove any existing handlers to avoid duplicates and resource leaks
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(numeric_level)
    stderr_handler.setFormatter(ConsoleFormatter())
    logger.addHandler(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(ISO8601Formatter())
        logger.addHandler(file_handler)

    return logger
