"""
Errors for fuzzytodo, and error logging utilities for the CLI.

Logs full stack traces for debugging while showing clean messages to users.
"""

import os
import traceback
from datetime import datetime, timezone
from pathlib import Path

from .config import get_config_dir


class TodoError(Exception):
    """Base class for fuzzytodo errors."""


class NotFoundError(TodoError, LookupError):
    """No item has been assigned the requested index."""

    def __init__(self, index):
        super().__init__(f"No item with index {index}")
        self.index = index


class QueryParseError(TodoError, ValueError):
    """A query line could not be parsed."""

    def __init__(self, message: str, line: str):
        super().__init__(f"{message}: {line!r}")
        self.line = line


def _error_log_path() -> Path:
    """Resolve error log path, respecting FUZZYTODO_CONFIG_DIR."""
    return get_config_dir() / "fuzzytodo-errors.log"


def log_exception(exc: Exception, context: str = "") -> Path:
    """
    Log exception with full traceback to file.

    Args:
        exc: The exception that occurred
        context: Optional context string (e.g., command name)

    Returns:
        Path to the error log file
    """
    log_path = _error_log_path()
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(log_path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o600)
        with os.fdopen(fd, "a") as f:
            f.write(f"\n{'='*60}\n")
            f.write(f"[{timestamp}]")
            if context:
                f.write(f" {context}")
            f.write("\n")
            f.write("".join(traceback.format_exception(exc)))
    except OSError:
        pass  # Can't write error log; don't crash over it
    return log_path
