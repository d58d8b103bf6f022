"""Resolution coordinator - which method, if any, this request requires.

Evaluation flow:
1. No target service → no MFA
2. Run resolvers in fixed precedence order; the first candidate wins
   (request parameter → registered service → MFA role → principal attribute)
3. No candidate → no MFA, the target service is left untouched
4. Verify the candidate:
   - supported → MfaRequirement (method, rank, source) attached to the target
   - unsupported, first time in this request → UnrecognizedAuthenticationMethodError
   - unsupported, already reported for this request → no MFA (suppressed)

Per-request states:
    START → NO_MFA
    START → CANDIDATE_FOUND → VERIFIED
    START → CANDIDATE_FOUND → REJECTED_FIRST (raises)
    REJECTED_FIRST → CANDIDATE_FOUND (same request) → SUPPRESSED
    VERIFIED → CANDIDATE_FOUND (same request, same requirement) → VERIFIED

Design principles:
1. Candidates are never merged; precedence is total and not configurable
2. A resolver abstaining is normal and never surfaced
3. A resolver crashing is not abstaining: resolution fails closed
   with ResolutionFailure
4. The coordinator keeps no per-request state; the request context does
"""

from __future__ import annotations

__all__ = [
    "ResolutionCoordinator",
    "build_coordinator",
]

from collections.abc import Sequence
from typing import TYPE_CHECKING

from mfa_gate.context import (
    Authentication,
    AuthenticationStore,
    InMemoryServiceRegistry,
    RequestContextProtocol,
    ServiceRegistry,
    TargetService,
)
from mfa_gate.exceptions import ResolutionFailure, UnrecognizedAuthenticationMethodError
from mfa_gate.registry import AuthenticationMethodRegistry
from mfa_gate.requirement import AuthenticationMethodSource, MfaRequirement
from mfa_gate.resolvers import (
    MethodResolverProtocol,
    MfaRoleProcessor,
    MfaRoleResolver,
    PrincipalAttributeMethodResolver,
    RegisteredServiceMethodResolver,
    RequestParameterMethodResolver,
    RoleSelection,
)
from mfa_gate.telemetry.system_logger import get_system_logger
from mfa_gate.verifier import AuthenticationMethodVerifier

if TYPE_CHECKING:
    from mfa_gate.config import MfaConfig
    from mfa_gate.telemetry.models import ResolutionOutcome
    from mfa_gate.telemetry.resolution_logger import ResolutionEventLogger


class ResolutionCoordinator:
    """Runs resolvers in precedence order and verifies the winner.

    Safe to share across concurrent requests: the registry is immutable,
    resolvers are stateless, and the rejection marker lives on the
    request context.
    """

    def __init__(
        self,
        resolvers: Sequence[MethodResolverProtocol],
        verifier: AuthenticationMethodVerifier,
        event_logger: ResolutionEventLogger | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            resolvers: Resolvers in precedence order (first wins).
            verifier: Verifier bound to the method registry.
            event_logger: Optional audit logger for resolution outcomes.
        """
        self._resolvers = tuple(resolvers)
        self._verifier = verifier
        self._event_logger = event_logger

    @property
    def resolvers(self) -> tuple[MethodResolverProtocol, ...]:
        return self._resolvers

    @property
    def registry(self) -> AuthenticationMethodRegistry:
        return self._verifier.registry

    def resolve_required_method(
        self,
        authentication: Authentication | None,
        target_service: TargetService | None,
        request_context: RequestContextProtocol,
    ) -> MfaRequirement | None:
        """Determine the method required for this request.

        Args:
            authentication: Current primary authentication, if any.
            target_service: Service being accessed; None if the request names none.
            request_context: Current request.

        Returns:
            The MfaRequirement attached to target_service, or None when no
            MFA is required (or a repeated rejection was suppressed).

        Raises:
            UnrecognizedAuthenticationMethodError: The selected candidate is not
                supported (at most once per request).
            ResolutionFailure: A resolver or collaborator failed unexpectedly, or
                the target service already carries a different requirement.
        """
        principal_id = authentication.principal.id if authentication is not None else None

        if target_service is None:
            self._log_outcome("no_mfa", request_context, principal_id=principal_id)
            return None

        found = self._find_candidate(authentication, target_service, request_context)
        if found is None:
            self._log_outcome("no_mfa", request_context, target_service, principal_id)
            return None

        candidate, source = found

        try:
            verified = self._verifier.verify(candidate, target_service, request_context)
        except UnrecognizedAuthenticationMethodError:
            self._log_outcome(
                "rejected", request_context, target_service, principal_id, method=candidate, source=source
            )
            raise

        if not verified:
            self._log_outcome(
                "suppressed", request_context, target_service, principal_id, method=candidate, source=source
            )
            return None

        method = self.registry.get_method(candidate)
        if method is None:
            raise ResolutionFailure(f"Verified method '{candidate}' is missing from the registry")
        requirement = MfaRequirement(method=method, source=source)
        existing = target_service.mfa_requirement
        if existing is None:
            target_service.attach_requirement(requirement)
        elif existing == requirement:
            # Host flow re-entered resolution for the same request
            requirement = existing
        else:
            error = (
                f"Service '{target_service.id}' already requires '{existing.method_name}' "
                f"({existing.source.value}); refusing to replace it with '{method.name}' ({source.value})"
            )
            self._log_outcome(
                "failed",
                request_context,
                target_service,
                principal_id,
                method=method.name,
                source=source,
                error=error,
            )
            raise ResolutionFailure(error)

        self._log_outcome(
            "verified",
            request_context,
            target_service,
            principal_id,
            method=method.name,
            source=source,
            rank=method.rank,
        )
        return requirement

    def _find_candidate(
        self,
        authentication: Authentication | None,
        target_service: TargetService,
        request_context: RequestContextProtocol,
    ) -> tuple[str, AuthenticationMethodSource] | None:
        """Return the first resolver's candidate and its source, or None."""
        for resolver in self._resolvers:
            try:
                candidate = resolver.resolve(authentication, target_service, request_context)
            except Exception as e:
                # Cannot tell "no opinion" from "lost opinion" - never downgrade to no MFA
                self._log_outcome(
                    "failed",
                    request_context,
                    target_service,
                    authentication.principal.id if authentication is not None else None,
                    source=resolver.source,
                    error=f"{type(e).__name__}: {e}",
                )
                raise ResolutionFailure(
                    f"Method resolver '{type(resolver).__name__}' failed unexpectedly: "
                    f"{type(e).__name__}: {e}. Cannot determine required authentication method."
                ) from e

            if candidate is not None and candidate.strip():
                return candidate, resolver.source

        return None

    def _log_outcome(
        self,
        outcome: ResolutionOutcome,
        request_context: RequestContextProtocol,
        target_service: TargetService | None = None,
        principal_id: str | None = None,
        *,
        method: str | None = None,
        source: AuthenticationMethodSource | None = None,
        rank: int | None = None,
        error: str | None = None,
    ) -> None:
        get_system_logger().debug(
            {
                "event": "mfa_resolution",
                "message": f"Resolution outcome '{outcome}'"
                + (f" for method '{method}'" if method else "")
                + (f" from {source.value}" if source else ""),
                "request_id": request_context.request_id,
            }
        )
        if self._event_logger is None:
            return
        self._event_logger.log(
            outcome,
            request_id=request_context.request_id,
            service_id=target_service.id if target_service is not None else None,
            principal_id=principal_id,
            method=method,
            rank=rank,
            source=source.value if source is not None else None,
            error=error,
        )


def build_coordinator(
    config: MfaConfig,
    services: ServiceRegistry | None = None,
    authentications: AuthenticationStore | None = None,
    event_logger: ResolutionEventLogger | None = None,
) -> ResolutionCoordinator:
    """Wire the standard resolver chain from configuration.

    Precedence is fixed: request parameter, registered service, MFA role,
    principal attribute. The role resolver runs as part of the registered
    service step, ahead of the principal attribute. The principal attribute
    resolver is omitted when no attribute name is configured; the role
    resolver when no authentication store is given.

    Args:
        config: Validated configuration.
        services: Host service registry. Defaults to the config's static services.
        authentications: Host authentication store for role rules.
        event_logger: Optional resolution audit logger.

    Returns:
        Ready-to-use coordinator.

    Raises:
        ConfigurationError: If the method configuration is invalid.
    """
    registry = AuthenticationMethodRegistry.from_config(config)
    if services is None:
        services = InMemoryServiceRegistry(config.services)

    resolvers: list[MethodResolverProtocol] = [
        RequestParameterMethodResolver(config.authn_method_parameter),
        RegisteredServiceMethodResolver(
            services,
            method_property=config.service_method_property,
            default_method=config.default_authentication_method,
        ),
    ]
    # Role rules complete the registered service step and precede user-level sources
    if authentications is not None:
        resolvers.append(
            MfaRoleResolver(
                MfaRoleProcessor(registry, method_property=config.service_method_property),
                services,
                authentications,
                selection=RoleSelection(config.role_selection),
            )
        )
    if config.principal_method_attribute:
        resolvers.append(PrincipalAttributeMethodResolver(registry, config.principal_method_attribute))

    return ResolutionCoordinator(resolvers, AuthenticationMethodVerifier(registry), event_logger)
