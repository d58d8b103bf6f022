"""Registered service resolver - the method a service definition demands.

Resolution:
1. No service definition for the target → abstain
2. Definition declares role rules (attribute name or pattern) → abstain,
   the role resolver decides
3. Definition declares the method property → that method
4. Otherwise → the configured default method, or abstain
"""

from __future__ import annotations

__all__ = ["RegisteredServiceMethodResolver"]

from mfa_gate.constants import (
    DEFAULT_SERVICE_METHOD_PROPERTY,
    MFA_ROLE_ATTRIBUTE_NAME_PROPERTY,
    MFA_ROLE_ATTRIBUTE_PATTERN_PROPERTY,
)
from mfa_gate.context import (
    Authentication,
    RequestContextProtocol,
    ServiceDefinition,
    ServiceRegistry,
    TargetService,
)
from mfa_gate.requirement import AuthenticationMethodSource
from mfa_gate.telemetry.system_logger import get_system_logger


def declares_mfa_roles(definition: ServiceDefinition) -> bool:
    """Check whether a service hands its decision to role rules."""
    return definition.has_property(MFA_ROLE_ATTRIBUTE_NAME_PROPERTY) or definition.has_property(
        MFA_ROLE_ATTRIBUTE_PATTERN_PROPERTY
    )


class RegisteredServiceMethodResolver:
    """Reads the method from the target's registered service definition."""

    source = AuthenticationMethodSource.REGISTERED_SERVICE

    def __init__(
        self,
        services: ServiceRegistry,
        method_property: str = DEFAULT_SERVICE_METHOD_PROPERTY,
        default_method: str | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            services: Host service registry.
            method_property: Service property holding the method name.
            default_method: Method to require when a registered service
                declares none.
        """
        self._services = services
        self.method_property = method_property
        self.default_method = default_method.strip() if default_method and default_method.strip() else None

    def resolve(
        self,
        authentication: Authentication | None,
        target_service: TargetService,
        request_context: RequestContextProtocol,
    ) -> str | None:
        logger = get_system_logger()
        definition = self._services.find_service_definition(target_service.id)
        if definition is None:
            logger.debug(
                {
                    "event": "service_not_registered",
                    "message": f"No registered service for '{target_service.id}'",
                    "request_id": request_context.request_id,
                }
            )
            return None

        if declares_mfa_roles(definition):
            logger.debug(
                {
                    "event": "service_defers_to_mfa_roles",
                    "message": f"Service '{definition.id}' declares role rules, deferring",
                    "request_id": request_context.request_id,
                }
            )
            return None

        method = definition.get_property(self.method_property)
        if method is not None and method.strip():
            return method

        if self.default_method is not None:
            logger.debug(
                {
                    "event": "service_default_method",
                    "message": f"Service '{definition.id}' declares no method, using default '{self.default_method}'",
                    "request_id": request_context.request_id,
                }
            )
        return self.default_method
