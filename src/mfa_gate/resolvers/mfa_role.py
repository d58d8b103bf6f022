"""Role based resolver - methods granted by role rules on the service.

A service opts in by declaring two properties:

    mfa_attribute_name     principal attribute holding the user's roles
    mfa_attribute_pattern  regular expression a role must fully match

plus the usual method property. Every role value that matches yields a
weighted method context. Selection among several contexts is explicit
policy (RoleSelection), not an implicit sort:

    FIRST_MATCH   first context in attribute value order
    HIGHEST_RANK  strongest method, attribute order on rank ties

The resolver needs an active primary authentication, found through the
ticket-granting-ticket id held in flow scope.
"""

from __future__ import annotations

__all__ = [
    "MethodContext",
    "MfaRoleProcessor",
    "MfaRoleResolver",
    "RoleSelection",
]

import re
from dataclasses import dataclass
from enum import Enum

from mfa_gate.constants import (
    DEFAULT_SERVICE_METHOD_PROPERTY,
    MFA_ROLE_ATTRIBUTE_NAME_PROPERTY,
    MFA_ROLE_ATTRIBUTE_PATTERN_PROPERTY,
)
from mfa_gate.context import (
    Authentication,
    AuthenticationStore,
    RequestContextProtocol,
    ServiceDefinition,
    ServiceRegistry,
    TargetService,
)
from mfa_gate.registry import AuthenticationMethod, AuthenticationMethodRegistry
from mfa_gate.requirement import AuthenticationMethodSource
from mfa_gate.telemetry.system_logger import get_system_logger


class RoleSelection(str, Enum):
    """Policy for picking one method among several role matches."""

    FIRST_MATCH = "first_match"
    HIGHEST_RANK = "highest_rank"


@dataclass(frozen=True, slots=True)
class MethodContext:
    """A method granted by one matching role value.

    Attributes:
        method: Granted method.
        role: The attribute value that matched.
    """

    method: AuthenticationMethod
    role: str

    @property
    def rank(self) -> int:
        return self.method.rank


class MfaRoleProcessor:
    """Evaluates a service's role rules against a principal's attributes."""

    def __init__(
        self,
        registry: AuthenticationMethodRegistry,
        method_property: str = DEFAULT_SERVICE_METHOD_PROPERTY,
    ) -> None:
        self._registry = registry
        self.method_property = method_property

    def resolve(self, authentication: Authentication, definition: ServiceDefinition) -> list[MethodContext]:
        """Get method contexts granted to the principal by the service's rules.

        Args:
            authentication: Active primary authentication.
            definition: Registered service definition.

        Returns:
            Contexts in attribute value order. Empty if the service has no
            complete rule, its method is unsupported, its pattern is invalid,
            or no role matches.
        """
        logger = get_system_logger()
        attribute_name = definition.get_property(MFA_ROLE_ATTRIBUTE_NAME_PROPERTY)
        pattern_text = definition.get_property(MFA_ROLE_ATTRIBUTE_PATTERN_PROPERTY)
        method_name = definition.get_property(self.method_property)

        if not attribute_name or not pattern_text or not method_name:
            logger.debug(
                {
                    "event": "mfa_role_rule_incomplete",
                    "message": f"Service '{definition.id}' has an incomplete role rule",
                }
            )
            return []

        method = self._registry.get_method(method_name)
        if method is None:
            logger.info(
                {
                    "event": "mfa_role_method_unsupported",
                    "message": f"Service '{definition.id}' role rule names unsupported method '{method_name}'",
                }
            )
            return []

        try:
            pattern = re.compile(pattern_text)
        except re.error as e:
            logger.warning(
                {
                    "event": "mfa_role_pattern_invalid",
                    "message": f"Service '{definition.id}' has invalid role pattern '{pattern_text}': {e}",
                }
            )
            return []

        roles = authentication.principal.get_attribute_values(attribute_name)
        return [MethodContext(method=method, role=role) for role in roles if pattern.fullmatch(role)]


class MfaRoleResolver:
    """Proposes the method granted by the target service's role rules."""

    source = AuthenticationMethodSource.MFA_ROLE

    def __init__(
        self,
        processor: MfaRoleProcessor,
        services: ServiceRegistry,
        authentications: AuthenticationStore,
        selection: RoleSelection = RoleSelection.FIRST_MATCH,
    ) -> None:
        self._processor = processor
        self._services = services
        self._authentications = authentications
        self.selection = RoleSelection(selection)

    def resolve(
        self,
        authentication: Authentication | None,
        target_service: TargetService,
        request_context: RequestContextProtocol,
    ) -> str | None:
        logger = get_system_logger()

        ticket_id = request_context.get_ticket_granting_ticket_id()
        if ticket_id is None:
            logger.debug(
                {
                    "event": "mfa_role_no_ticket",
                    "message": "No ticket-granting ticket in flow scope, skipping role rules",
                    "request_id": request_context.request_id,
                }
            )
            return None

        active = self._authentications.get_authentication_for(ticket_id)
        if active is None:
            logger.debug(
                {
                    "event": "mfa_role_no_authentication",
                    "message": "No active authentication for ticket, skipping role rules",
                    "request_id": request_context.request_id,
                }
            )
            return None

        definition = self._services.find_service_definition(target_service.id)
        if definition is None:
            return None

        contexts = self._processor.resolve(active, definition)
        if not contexts:
            logger.debug(
                {
                    "event": "mfa_role_no_match",
                    "message": f"No role rule of service '{definition.id}' matched",
                    "request_id": request_context.request_id,
                }
            )
            return None

        chosen = self.select(contexts)
        logger.info(
            {
                "event": "mfa_role_matched",
                "message": f"Role '{chosen.role}' requires '{chosen.method.name}' for service '{definition.id}'",
                "request_id": request_context.request_id,
            }
        )
        return chosen.method.name

    def select(self, contexts: list[MethodContext]) -> MethodContext:
        """Pick one context according to the selection policy."""
        if self.selection is RoleSelection.HIGHEST_RANK:
            # max() keeps the first of equal maxima
            return max(contexts, key=lambda c: c.rank)
        return contexts[0]
