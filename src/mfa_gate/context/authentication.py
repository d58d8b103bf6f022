"""Authentication model - WHO has already logged in.

An Authentication is the result of a prior primary login, held by the
host server and looked up by ticket-granting-ticket id.
"""

from __future__ import annotations

__all__ = [
    "Authentication",
    "AuthenticationStore",
    "InMemoryAuthenticationStore",
    "Principal",
]

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class Principal(BaseModel):
    """The authenticated user.

    Attributes:
        id: Principal identifier (username).
        attributes: Resolved user attributes. Values are strings or lists of strings.
    """

    id: str
    attributes: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def get_attribute_values(self, name: str) -> list[str]:
        """Get an attribute as a list of non-blank strings.

        Single values are wrapped; non-string entries are ignored.
        """
        value = self.attributes.get(name)
        if value is None:
            return []
        values = value if isinstance(value, (list, tuple, set, frozenset)) else [value]
        return [v for v in values if isinstance(v, str) and v.strip()]


class Authentication(BaseModel):
    """A completed primary authentication.

    Attributes:
        principal: The authenticated principal.
        authenticated_at: When the primary login happened.
    """

    principal: Principal
    authenticated_at: datetime | None = None

    model_config = ConfigDict(frozen=True)


@runtime_checkable
class AuthenticationStore(Protocol):
    """Host interface for looking up authentications by ticket id."""

    def get_authentication_for(self, ticket_id: str) -> Authentication | None:
        """Return the authentication bound to the ticket, or None."""
        ...


class InMemoryAuthenticationStore:
    """Dict-backed AuthenticationStore, for embedding and tests."""

    def __init__(self, authentications: Mapping[str, Authentication] | None = None) -> None:
        self._authentications = dict(authentications or {})

    def get_authentication_for(self, ticket_id: str) -> Authentication | None:
        return self._authentications.get(ticket_id)

    def add(self, ticket_id: str, authentication: Authentication) -> None:
        self._authentications[ticket_id] = authentication
