"""JSONL file logging for mfa-gate.

Both file logs (audit/resolutions.jsonl and system/system.jsonl) share one
line format: a JSON object whose first key is the UTC "time" of the record,
followed by the structured fields the caller logged. Loggers are given dict
messages; plain strings become {"message": ...}.
"""

from __future__ import annotations

__all__ = [
    "ISO8601Formatter",
    "ensure_log_directory",
    "setup_jsonl_logger",
]

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path


class ISO8601Formatter(logging.Formatter):
    """Render a record as one JSONL line with a millisecond UTC timestamp.

    Example line:
        {"time": "2026-10-18T09:12:03.481Z", "event": "mfa_resolution", "outcome": "verified", ...}

    Values json cannot encode (enums, datetimes) are written with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

        if isinstance(record.msg, dict):
            fields = record.msg
        else:
            fields = {"message": record.getMessage()}

        return json.dumps({"time": timestamp, **fields}, default=str)


def ensure_log_directory(log_file: Path) -> None:
    """Create the directory holding a log file, readable by the owner only.

    Resolution events name principals, so the directory is restricted to
    0700 where the platform allows it.

    Raises:
        PermissionError: If the directory cannot be created.
        OSError: If creation fails for another reason.
    """
    log_dir = log_file.parent
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        raise PermissionError(f"Cannot create log directory {log_dir}: {e}") from e
    except OSError as e:
        raise OSError(f"Failed to create log directory {log_dir}: {e}") from e

    if sys.platform != "win32":
        try:
            log_dir.chmod(0o700)
        except OSError:
            pass  # directory owned by another user; keep its mode


def setup_jsonl_logger(
    logger_name: str,
    log_file: Path,
    log_level: int = logging.INFO,
) -> logging.Logger:
    """Point a named logger at a JSONL file, replacing earlier handlers.

    Calling this again for the same name (e.g. after the config's log_dir
    changed) closes the old file and opens the new one. The logger does not
    propagate, so resolution events never reach the console.

    Args:
        logger_name: Logger name, e.g. "mfa-gate.audit.resolutions".
        log_file: File to append to.
        log_level: Minimum level written.

    Returns:
        The configured logger.

    Raises:
        PermissionError: If the log directory cannot be created.
        OSError: If directory creation fails for another reason.
    """
    ensure_log_directory(log_file)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.propagate = False

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    return logger
