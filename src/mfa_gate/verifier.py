"""Authentication method verification.

Confirms that a proposed method is supported by the deployment.

An unsupported method is reported exactly once per request. The host
flow keeps re-running target service extraction while it renders the
error view, and the offending parameter is still on the request. Raising
again would redirect to the error view again, forever. The verifier
therefore records a rejection marker on the request before raising, and
lets a second verification of the same request pass through.
"""

from __future__ import annotations

__all__ = ["AuthenticationMethodVerifier"]

from mfa_gate.context.request import RequestContextProtocol
from mfa_gate.context.service import TargetService
from mfa_gate.exceptions import UnrecognizedAuthenticationMethodError
from mfa_gate.registry import AuthenticationMethodRegistry
from mfa_gate.telemetry.system_logger import get_system_logger


class AuthenticationMethodVerifier:
    """Checks candidate methods against the registry."""

    def __init__(self, registry: AuthenticationMethodRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> AuthenticationMethodRegistry:
        return self._registry

    def verify(
        self,
        method: str,
        target_service: TargetService,
        request_context: RequestContextProtocol,
    ) -> bool:
        """Verify a candidate method for the current request.

        Args:
            method: Candidate method name.
            target_service: Service being accessed (for the error).
            request_context: Current request; holds the rejection marker.

        Returns:
            True if the method is supported. False if it is not, but a
            rejection was already reported for this request (suppressed).

        Raises:
            UnrecognizedAuthenticationMethodError: First time an unsupported
                method is seen within this request.
        """
        if self._registry.contains_method(method):
            return True

        logger = get_system_logger()
        logger.debug(
            {
                "event": "unsupported_authentication_method",
                "message": f"Authentication method '{method}' is not supported",
                "method": method,
                "service_id": target_service.id,
                "request_id": request_context.request_id,
            }
        )

        if request_context.set_rejection_marker():
            raise UnrecognizedAuthenticationMethodError(method, target_service.id)

        logger.debug(
            {
                "event": "unsupported_authentication_method_suppressed",
                "message": f"Rejection of '{method}' already reported for this request",
                "request_id": request_context.request_id,
            }
        )
        return False
