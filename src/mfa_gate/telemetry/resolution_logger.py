"""Resolution audit logging.

Writes one JSONL event per resolution outcome to
<log_dir>/audit/resolutions.jsonl.
"""

from __future__ import annotations

__all__ = [
    "ResolutionEventLogger",
    "create_resolution_logger",
]

import logging
from pathlib import Path

from mfa_gate.telemetry.models import ResolutionEvent, ResolutionOutcome
from mfa_gate.telemetry.system_logger import get_system_logger
from mfa_gate.utils.logging import setup_jsonl_logger


def create_resolution_logger(log_path: Path) -> logging.Logger:
    """Create the JSONL logger for resolution events."""
    return setup_jsonl_logger("mfa-gate.audit.resolutions", log_path, log_level=logging.INFO)


class ResolutionEventLogger:
    """Logs resolution events to resolutions.jsonl.

    A failure to write the audit record is reported on the system logger
    and never changes the resolution result.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @classmethod
    def for_path(cls, log_path: Path) -> ResolutionEventLogger:
        return cls(create_resolution_logger(log_path))

    def log(
        self,
        outcome: ResolutionOutcome,
        *,
        request_id: str,
        service_id: str | None = None,
        principal_id: str | None = None,
        method: str | None = None,
        rank: int | None = None,
        source: str | None = None,
        error: str | None = None,
    ) -> None:
        """Write one resolution event.

        Args:
            outcome: Terminal state of the resolution.
            request_id: Request correlation id.
            service_id: Target service id.
            principal_id: Authenticated principal id.
            method: Candidate or resolved method.
            rank: Rank of the resolved method.
            source: Resolver source value.
            error: Error description for failed resolutions.
        """
        event = ResolutionEvent(
            outcome=outcome,
            request_id=request_id,
            service_id=service_id,
            principal_id=principal_id,
            method=method,
            rank=rank,
            source=source,
            error=error,
        )
        try:
            self._logger.info(event.model_dump(exclude_none=True))
        except Exception as e:
            get_system_logger().error(
                {
                    "event": "resolution_log_failed",
                    "message": f"Failed to write resolution event: {e}",
                    "request_id": request_id,
                }
            )
