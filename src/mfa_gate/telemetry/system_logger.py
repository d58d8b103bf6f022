"""Operational logger for mfa-gate.

Resolver abstentions, unsupported principal attributes, invalid role
patterns and audit write failures go here. Resolution outcomes do not:
they belong to the audit log (resolution_logger.py).

Destinations:
- stderr: every record at or above the configured level (INFO by default,
  DEBUG shows each resolver's reasoning)
- <log_dir>/system/system.jsonl: WARNING and above, once
  configure_system_logger_file() has been called

Messages are dicts with at least "event" and "message"; resolver records
also carry the "request_id" of the login request.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "get_system_logger",
    "set_system_log_level",
]

import logging
import sys
from pathlib import Path

from mfa_gate.constants import APP_NAME
from mfa_gate.utils.logging import ISO8601Formatter, ensure_log_directory


class ConsoleFormatter(logging.Formatter):
    """One "LEVEL: message" line per record, falling back to the event name."""

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


_system_logger: logging.Logger | None = None
_file_handler_configured: bool = False


def get_system_logger() -> logging.Logger:
    """Return the process-wide "mfa-gate.system" logger.

    Built on first use with a stderr handler. The handler passes every
    level through, so verbosity is controlled by the logger level alone
    (see set_system_log_level).

    Example:
        >>> get_system_logger().info({"event": "principal_method_unsupported", "message": "..."})
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    logger = logging.getLogger(f"{APP_NAME}.system")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.DEBUG)
    stderr_handler.setFormatter(ConsoleFormatter())
    logger.addHandler(stderr_handler)

    _system_logger = logger
    return logger


def set_system_log_level(level: str | int) -> None:
    """Set the system logger level from config (e.g. "DEBUG")."""
    get_system_logger().setLevel(level)


def configure_system_logger_file(log_path: Path) -> None:
    """Also write WARNING and above to system.jsonl.

    Only the first call takes effect. If the log directory cannot be
    created the problem is reported on stderr and logging continues
    there only.

    Args:
        log_path: <log_dir>/system/system.jsonl.
    """
    global _file_handler_configured

    if _file_handler_configured:
        return

    logger = get_system_logger()

    try:
        ensure_log_directory(log_path)
    except OSError as e:
        logger.warning(
            {
                "event": "system_log_file_unavailable",
                "message": f"System log file disabled: {e}",
            }
        )
        return

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    _file_handler_configured = True
