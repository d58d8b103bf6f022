"""Unit tests for method source resolvers.

Each resolver either proposes a candidate or abstains with None;
none of them raise for unsupported methods.
"""

import pytest

from mfa_gate.constants import TICKET_GRANTING_TICKET_FLOW_KEY
from mfa_gate.context import (
    Authentication,
    InMemoryAuthenticationStore,
    InMemoryServiceRegistry,
    MfaRequestContext,
    Principal,
    ServiceDefinition,
    TargetService,
)
from mfa_gate.registry import AuthenticationMethod, AuthenticationMethodRegistry
from mfa_gate.requirement import AuthenticationMethodSource
from mfa_gate.resolvers import (
    MethodContext,
    MethodResolverProtocol,
    MfaRoleProcessor,
    MfaRoleResolver,
    PrincipalAttributeMethodResolver,
    RegisteredServiceMethodResolver,
    RequestParameterMethodResolver,
    RoleSelection,
)

# ============================================================================
# Fixtures
# ============================================================================

GITHUB = "https://www.github.com"


@pytest.fixture
def registry() -> AuthenticationMethodRegistry:
    return AuthenticationMethodRegistry(
        [
            AuthenticationMethod("sample_two_factor", 1),
            AuthenticationMethod("strong_two_factor", 2),
        ]
    )


@pytest.fixture
def target_service() -> TargetService:
    return TargetService(id=GITHUB)


@pytest.fixture
def make_authentication():
    """Factory for authentications with the given principal attributes."""

    def _make(principal_id: str = "jdoe", **attributes) -> Authentication:
        return Authentication(principal=Principal(id=principal_id, attributes=attributes))

    return _make


@pytest.fixture
def role_services() -> InMemoryServiceRegistry:
    """Service registry with a role rule on GitHub."""
    return InMemoryServiceRegistry(
        [
            ServiceDefinition(
                id="github",
                service_id="https://www.github.com*",
                properties={
                    "authn_method": "strong_two_factor",
                    "mfa_attribute_name": "memberOf",
                    "mfa_attribute_pattern": "cn=(admins|ops),.*",
                },
            )
        ]
    )


# ============================================================================
# Protocol compliance
# ============================================================================


class TestResolverProtocolCompliance:
    """Built-in resolvers satisfy MethodResolverProtocol."""

    def test_builtin_resolvers_are_protocol_instances(self, registry, role_services):
        resolvers = [
            RequestParameterMethodResolver(),
            RegisteredServiceMethodResolver(role_services),
            PrincipalAttributeMethodResolver(registry),
            MfaRoleResolver(MfaRoleProcessor(registry), role_services, InMemoryAuthenticationStore()),
        ]

        for resolver in resolvers:
            assert isinstance(resolver, MethodResolverProtocol)

    def test_sources(self, registry, role_services):
        assert RequestParameterMethodResolver.source is AuthenticationMethodSource.REQUEST_PARAMETER
        assert RegisteredServiceMethodResolver.source is AuthenticationMethodSource.REGISTERED_SERVICE
        assert PrincipalAttributeMethodResolver.source is AuthenticationMethodSource.PRINCIPAL_ATTRIBUTE
        assert MfaRoleResolver.source is AuthenticationMethodSource.MFA_ROLE


# ============================================================================
# RequestParameterMethodResolver
# ============================================================================


class TestRequestParameterMethodResolver:
    """Explicit method on the request."""

    def test_returns_parameter_value(self, target_service):
        request_context = MfaRequestContext(parameters={"authn_method": "strong_two_factor"})

        assert RequestParameterMethodResolver().resolve(None, target_service, request_context) == "strong_two_factor"

    def test_missing_parameter_abstains(self, target_service):
        assert RequestParameterMethodResolver().resolve(None, target_service, MfaRequestContext()) is None

    def test_blank_parameter_abstains(self, target_service):
        request_context = MfaRequestContext(parameters={"authn_method": "  "})

        assert RequestParameterMethodResolver().resolve(None, target_service, request_context) is None

    def test_unsupported_value_is_still_proposed(self, target_service):
        request_context = MfaRequestContext(parameters={"authn_method": "bogus"})

        assert RequestParameterMethodResolver().resolve(None, target_service, request_context) == "bogus"

    def test_custom_parameter_name(self, target_service):
        request_context = MfaRequestContext(parameters={"acr": "strong_two_factor"})

        assert RequestParameterMethodResolver("acr").resolve(None, target_service, request_context) == "strong_two_factor"


# ============================================================================
# RegisteredServiceMethodResolver
# ============================================================================


class TestRegisteredServiceMethodResolver:
    """Service-level policy."""

    def test_returns_service_method(self, target_service):
        services = InMemoryServiceRegistry(
            [ServiceDefinition(id="github", service_id=GITHUB, properties={"authn_method": "strong_two_factor"})]
        )

        result = RegisteredServiceMethodResolver(services).resolve(None, target_service, MfaRequestContext())

        assert result == "strong_two_factor"

    def test_unregistered_service_abstains_even_with_default(self, target_service):
        resolver = RegisteredServiceMethodResolver(InMemoryServiceRegistry(), default_method="sample_two_factor")

        assert resolver.resolve(None, target_service, MfaRequestContext()) is None

    def test_service_without_method_uses_default(self, target_service):
        services = InMemoryServiceRegistry([ServiceDefinition(id="github", service_id=GITHUB)])
        resolver = RegisteredServiceMethodResolver(services, default_method="sample_two_factor")

        assert resolver.resolve(None, target_service, MfaRequestContext()) == "sample_two_factor"

    def test_service_without_method_and_no_default_abstains(self, target_service):
        services = InMemoryServiceRegistry([ServiceDefinition(id="github", service_id=GITHUB)])

        assert RegisteredServiceMethodResolver(services).resolve(None, target_service, MfaRequestContext()) is None

    def test_blank_default_is_no_default(self, target_service):
        services = InMemoryServiceRegistry([ServiceDefinition(id="github", service_id=GITHUB)])
        resolver = RegisteredServiceMethodResolver(services, default_method="   ")

        assert resolver.resolve(None, target_service, MfaRequestContext()) is None

    def test_defers_when_role_rules_declared(self, target_service, role_services):
        resolver = RegisteredServiceMethodResolver(role_services, default_method="sample_two_factor")

        assert resolver.resolve(None, target_service, MfaRequestContext()) is None

    @pytest.mark.parametrize("role_property", ["mfa_attribute_name", "mfa_attribute_pattern"])
    def test_defers_when_either_role_property_declared(self, target_service, role_property):
        services = InMemoryServiceRegistry(
            [
                ServiceDefinition(
                    id="github",
                    service_id=GITHUB,
                    properties={"authn_method": "strong_two_factor", role_property: "x"},
                )
            ]
        )

        assert RegisteredServiceMethodResolver(services).resolve(None, target_service, MfaRequestContext()) is None

    def test_custom_method_property(self, target_service):
        services = InMemoryServiceRegistry(
            [ServiceDefinition(id="github", service_id=GITHUB, properties={"mfa_method": "strong_two_factor"})]
        )
        resolver = RegisteredServiceMethodResolver(services, method_property="mfa_method")

        assert resolver.resolve(None, target_service, MfaRequestContext()) == "strong_two_factor"


# ============================================================================
# PrincipalAttributeMethodResolver
# ============================================================================


class TestPrincipalAttributeMethodResolver:
    """User-level policy."""

    def test_returns_supported_attribute_value(self, registry, target_service, make_authentication):
        authentication = make_authentication(authn_method="strong_two_factor")

        result = PrincipalAttributeMethodResolver(registry).resolve(authentication, target_service, MfaRequestContext())

        assert result == "strong_two_factor"

    def test_without_authentication_abstains(self, registry, target_service):
        assert PrincipalAttributeMethodResolver(registry).resolve(None, target_service, MfaRequestContext()) is None

    def test_missing_attribute_abstains(self, registry, target_service, make_authentication):
        authentication = make_authentication(mail="jdoe@example.com")

        assert PrincipalAttributeMethodResolver(registry).resolve(authentication, target_service, MfaRequestContext()) is None

    def test_unsupported_value_abstains_instead_of_rejecting(self, registry, target_service, make_authentication):
        authentication = make_authentication(authn_method="bogus")

        assert PrincipalAttributeMethodResolver(registry).resolve(authentication, target_service, MfaRequestContext()) is None

    def test_list_value_uses_first_entry(self, registry, target_service, make_authentication):
        authentication = make_authentication(authn_method=["sample_two_factor", "strong_two_factor"])

        result = PrincipalAttributeMethodResolver(registry).resolve(authentication, target_service, MfaRequestContext())

        assert result == "sample_two_factor"

    def test_custom_attribute_name(self, registry, target_service, make_authentication):
        authentication = make_authentication(mfaMethod="strong_two_factor")
        resolver = PrincipalAttributeMethodResolver(registry, attribute_name="mfaMethod")

        assert resolver.resolve(authentication, target_service, MfaRequestContext()) == "strong_two_factor"


# ============================================================================
# MfaRoleProcessor
# ============================================================================


class TestMfaRoleProcessor:
    """Role rule evaluation."""

    def test_matching_roles_yield_contexts(self, registry, role_services, make_authentication):
        # Arrange
        definition = role_services.find_service_definition(GITHUB)
        authentication = make_authentication(memberOf=["cn=staff,dc=example", "cn=admins,dc=example"])

        # Act
        contexts = MfaRoleProcessor(registry).resolve(authentication, definition)

        # Assert
        assert [c.role for c in contexts] == ["cn=admins,dc=example"]
        assert contexts[0].method.name == "strong_two_factor"
        assert contexts[0].rank == 2

    def test_pattern_must_match_whole_value(self, registry, role_services, make_authentication):
        definition = role_services.find_service_definition(GITHUB)
        authentication = make_authentication(memberOf="ou=x,cn=admins,dc=example")

        assert MfaRoleProcessor(registry).resolve(authentication, definition) == []

    def test_unsupported_service_method_yields_nothing(self, registry, make_authentication):
        definition = ServiceDefinition(
            id="github",
            service_id=GITHUB,
            properties={
                "authn_method": "bogus",
                "mfa_attribute_name": "memberOf",
                "mfa_attribute_pattern": ".*",
            },
        )

        assert MfaRoleProcessor(registry).resolve(make_authentication(memberOf="anything"), definition) == []

    def test_invalid_pattern_yields_nothing(self, registry, make_authentication):
        definition = ServiceDefinition(
            id="github",
            service_id=GITHUB,
            properties={
                "authn_method": "strong_two_factor",
                "mfa_attribute_name": "memberOf",
                "mfa_attribute_pattern": "cn=(admins",
            },
        )

        assert MfaRoleProcessor(registry).resolve(make_authentication(memberOf="cn=admins"), definition) == []

    def test_incomplete_rule_yields_nothing(self, registry, make_authentication):
        definition = ServiceDefinition(
            id="github",
            service_id=GITHUB,
            properties={"authn_method": "strong_two_factor", "mfa_attribute_name": "memberOf"},
        )

        assert MfaRoleProcessor(registry).resolve(make_authentication(memberOf="cn=admins"), definition) == []


# ============================================================================
# MfaRoleResolver
# ============================================================================


class TestMfaRoleResolver:
    """Role rules with an active authentication from flow scope."""

    @pytest.fixture
    def store(self, make_authentication) -> InMemoryAuthenticationStore:
        return InMemoryAuthenticationStore({"TGT-1": make_authentication(memberOf="cn=ops,dc=example")})

    @pytest.fixture
    def resolver(self, registry, role_services, store) -> MfaRoleResolver:
        return MfaRoleResolver(MfaRoleProcessor(registry), role_services, store)

    def test_matching_role_returns_service_method(self, resolver, target_service):
        request_context = MfaRequestContext(flow_scope={TICKET_GRANTING_TICKET_FLOW_KEY: "TGT-1"})

        assert resolver.resolve(None, target_service, request_context) == "strong_two_factor"

    def test_without_ticket_abstains(self, resolver, target_service):
        assert resolver.resolve(None, target_service, MfaRequestContext()) is None

    def test_unknown_ticket_abstains(self, resolver, target_service):
        request_context = MfaRequestContext(flow_scope={TICKET_GRANTING_TICKET_FLOW_KEY: "TGT-expired"})

        assert resolver.resolve(None, target_service, request_context) is None

    def test_unregistered_service_abstains(self, resolver):
        request_context = MfaRequestContext(flow_scope={TICKET_GRANTING_TICKET_FLOW_KEY: "TGT-1"})

        assert resolver.resolve(None, TargetService(id="https://other.example"), request_context) is None

    def test_no_matching_role_abstains(self, registry, role_services, make_authentication, target_service):
        store = InMemoryAuthenticationStore({"TGT-2": make_authentication(memberOf="cn=staff,dc=example")})
        resolver = MfaRoleResolver(MfaRoleProcessor(registry), role_services, store)
        request_context = MfaRequestContext(flow_scope={TICKET_GRANTING_TICKET_FLOW_KEY: "TGT-2"})

        assert resolver.resolve(None, target_service, request_context) is None


class TestRoleSelection:
    """Explicit selection policy among several contexts."""

    @pytest.fixture
    def contexts(self) -> list[MethodContext]:
        return [
            MethodContext(method=AuthenticationMethod("sample_two_factor", 1), role="cn=staff"),
            MethodContext(method=AuthenticationMethod("strong_two_factor", 2), role="cn=admins"),
            MethodContext(method=AuthenticationMethod("other_strong", 2), role="cn=ops"),
        ]

    def _resolver(self, selection: RoleSelection) -> MfaRoleResolver:
        registry = AuthenticationMethodRegistry()
        return MfaRoleResolver(
            MfaRoleProcessor(registry),
            InMemoryServiceRegistry(),
            InMemoryAuthenticationStore(),
            selection=selection,
        )

    def test_first_match_uses_evaluation_order(self, contexts):
        assert self._resolver(RoleSelection.FIRST_MATCH).select(contexts).role == "cn=staff"

    def test_highest_rank_prefers_strongest_then_order(self, contexts):
        assert self._resolver(RoleSelection.HIGHEST_RANK).select(contexts).role == "cn=admins"

    def test_selection_accepts_config_string(self):
        resolver = MfaRoleResolver(
            MfaRoleProcessor(AuthenticationMethodRegistry()),
            InMemoryServiceRegistry(),
            InMemoryAuthenticationStore(),
            selection="highest_rank",  # type: ignore[arg-type]
        )

        assert resolver.selection is RoleSelection.HIGHEST_RANK
