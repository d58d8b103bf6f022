"""Principal attribute resolver - the method stored on the user.

Only applies once the user has a primary authentication. A value naming
a method the registry does not know is treated as no opinion: the
resolver logs it and abstains rather than rejecting the request.
"""

from __future__ import annotations

__all__ = ["PrincipalAttributeMethodResolver"]

from mfa_gate.constants import DEFAULT_PRINCIPAL_METHOD_ATTRIBUTE
from mfa_gate.context import Authentication, RequestContextProtocol, TargetService
from mfa_gate.registry import AuthenticationMethodRegistry
from mfa_gate.requirement import AuthenticationMethodSource
from mfa_gate.telemetry.system_logger import get_system_logger


class PrincipalAttributeMethodResolver:
    """Reads the method from an attribute of the authenticated principal."""

    source = AuthenticationMethodSource.PRINCIPAL_ATTRIBUTE

    def __init__(
        self,
        registry: AuthenticationMethodRegistry,
        attribute_name: str = DEFAULT_PRINCIPAL_METHOD_ATTRIBUTE,
    ) -> None:
        self._registry = registry
        self.attribute_name = attribute_name

    def resolve(
        self,
        authentication: Authentication | None,
        target_service: TargetService,
        request_context: RequestContextProtocol,
    ) -> str | None:
        if authentication is None:
            return None

        principal = authentication.principal
        values = principal.get_attribute_values(self.attribute_name)
        if not values:
            return None

        method = values[0]
        logger = get_system_logger()
        logger.debug(
            {
                "event": "method_from_principal_attribute",
                "message": f"Found attribute '{self.attribute_name}' = '{method}' for principal '{principal.id}'",
                "request_id": request_context.request_id,
            }
        )

        if not self._registry.contains_method(method):
            logger.info(
                {
                    "event": "principal_method_unsupported",
                    "message": (
                        f"Attribute '{self.attribute_name}' value '{method}' of principal "
                        f"'{principal.id}' is not a supported method, ignoring"
                    ),
                    "request_id": request_context.request_id,
                }
            )
            return None

        return method
