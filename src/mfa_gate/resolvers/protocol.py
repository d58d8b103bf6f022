"""Protocol definition for method source resolvers.

Each resolver inspects one data source and proposes a method name, or
abstains with None. Resolvers never raise for unsupported methods:
a proposal is an opinion, validated later by the verifier.

External sources implement this protocol via adapters without
inheriting from our code (structural subtyping).

Example adapter:

    class HeaderMethodResolver:
        source = AuthenticationMethodSource.REQUEST_PARAMETER

        def resolve(self, authentication, target_service, request_context):
            return request_context.get_parameter("X-Authn-Method")
"""

from __future__ import annotations

__all__ = ["MethodResolverProtocol"]

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mfa_gate.context import Authentication, RequestContextProtocol, TargetService
    from mfa_gate.requirement import AuthenticationMethodSource


@runtime_checkable
class MethodResolverProtocol(Protocol):
    """Protocol for method source resolvers.

    Required attributes:
    - source: Tag attached to requirements this resolver produces

    Thread-safety:
    - resolve() is called concurrently from many requests and must not
      keep per-request state on the resolver
    """

    @property
    def source(self) -> "AuthenticationMethodSource":
        """Source tag for requirements built from this resolver's candidates."""
        ...

    def resolve(
        self,
        authentication: "Authentication | None",
        target_service: "TargetService",
        request_context: "RequestContextProtocol",
    ) -> str | None:
        """Propose a method for the request.

        Args:
            authentication: Current primary authentication, if any.
            target_service: Service being accessed.
            request_context: Current request.

        Returns:
            Candidate method name, or None to abstain.
        """
        ...
