"""Pydantic models for the resolution audit log (audit/resolutions.jsonl).

The 'time' field is not part of the models: ISO8601Formatter adds the
timestamp during serialization.
"""

from __future__ import annotations

__all__ = [
    "ResolutionEvent",
    "ResolutionOutcome",
]

from typing import Literal

from pydantic import BaseModel, ConfigDict

ResolutionOutcome = Literal["no_mfa", "verified", "rejected", "suppressed", "failed"]


class ResolutionEvent(BaseModel):
    """One resolution of one request.

    Attributes:
        event: Always "mfa_resolution".
        outcome: Terminal state of the resolution.
        request_id: Request correlation id.
        service_id: Target service, if the request named one.
        principal_id: Authenticated principal, if any.
        method: Candidate or resolved method name.
        rank: Rank of the resolved method (verified only).
        source: Resolver that produced the candidate.
        error: Error description (failed only).
    """

    event: Literal["mfa_resolution"] = "mfa_resolution"
    outcome: ResolutionOutcome
    request_id: str
    service_id: str | None = None
    principal_id: str | None = None
    method: str | None = None
    rank: int | None = None
    source: str | None = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)
