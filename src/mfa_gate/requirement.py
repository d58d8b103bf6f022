"""Resolution outcome types.

An MfaRequirement is produced at most once per request, attached to the
target service and consumed by the host flow. It is never persisted.
"""

from __future__ import annotations

__all__ = [
    "AuthenticationMethodSource",
    "MfaRequirement",
]

from dataclasses import dataclass
from enum import Enum

from mfa_gate.registry import AuthenticationMethod


class AuthenticationMethodSource(str, Enum):
    """Where a required method was discovered.

    Inherits from str for easy serialization and comparison.

    Attributes:
        REQUEST_PARAMETER: Explicit method carried on the inbound request.
        REGISTERED_SERVICE: Method declared by the service definition (or the default).
        PRINCIPAL_ATTRIBUTE: Method stored as an attribute of the authenticated user.
        MFA_ROLE: Method granted by a role rule on the service definition.
    """

    REQUEST_PARAMETER = "request_parameter"
    REGISTERED_SERVICE = "registered_service"
    PRINCIPAL_ATTRIBUTE = "principal_attribute"
    MFA_ROLE = "mfa_role"


@dataclass(frozen=True, slots=True)
class MfaRequirement:
    """A verified, ranked method requirement.

    Attributes:
        method: The required method, always a member of the registry.
        source: The resolver that proposed it.
    """

    method: AuthenticationMethod
    source: AuthenticationMethodSource

    @property
    def method_name(self) -> str:
        return self.method.name

    @property
    def rank(self) -> int:
        return self.method.rank
