"""Request context - the narrow view of the host's request and flow state.

The coordinator reads request parameters and flow-scoped values through
this interface and writes exactly one thing back: the rejection marker,
a one-shot flag recording that an unrecognized method was already
reported for this request.

Hosts with their own request objects implement RequestContextProtocol via
an adapter. MfaRequestContext is a plain request-scoped implementation.
"""

from __future__ import annotations

__all__ = [
    "MfaRequestContext",
    "RequestContextProtocol",
]

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from mfa_gate.constants import TICKET_GRANTING_TICKET_FLOW_KEY


@runtime_checkable
class RequestContextProtocol(Protocol):
    """Interface the coordinator uses to read and mark the current request.

    Rejection marker semantics: first writer wins, and the set value is
    visible to every later read within the same request. The marker never
    outlives the request.
    """

    @property
    def request_id(self) -> str:
        """Correlation id for logs."""
        ...

    def get_parameter(self, name: str) -> str | None:
        """Return a single-valued request parameter, or None."""
        ...

    def get_ticket_granting_ticket_id(self) -> str | None:
        """Return the flow-scoped ticket-granting-ticket id, or None."""
        ...

    def has_rejection_marker(self) -> bool:
        """Check whether a rejection was already reported for this request."""
        ...

    def set_rejection_marker(self) -> bool:
        """Set the marker.

        Returns:
            True if this call set it, False if it was already set.
        """
        ...


@dataclass
class MfaRequestContext:
    """Request-scoped state for one resolution.

    Create one per inbound request and discard it with the request.
    Re-entrant resolution for the same request (e.g. while the host renders
    an error view) must reuse the same instance so the marker is seen.

    Attributes:
        parameters: Inbound request parameters (single-valued).
        flow_scope: Values held by the host flow for this request.
        request_id: Correlation id for logs.
        rejection_marker: Set once an unrecognized method was reported.
    """

    parameters: Mapping[str, str] = field(default_factory=dict)
    flow_scope: dict[str, Any] = field(default_factory=dict)
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    rejection_marker: bool = False

    def get_parameter(self, name: str) -> str | None:
        value = self.parameters.get(name)
        if value is None or not str(value).strip():
            return None
        return str(value)

    def get_ticket_granting_ticket_id(self) -> str | None:
        value = self.flow_scope.get(TICKET_GRANTING_TICKET_FLOW_KEY)
        if not isinstance(value, str) or not value.strip():
            return None
        return value

    def has_rejection_marker(self) -> bool:
        return self.rejection_marker

    def set_rejection_marker(self) -> bool:
        if self.rejection_marker:
            return False
        self.rejection_marker = True
        return True
