"""Unit tests for the authentication method registry."""

import pytest

from mfa_gate.config import AuthenticationMethodConfig, MfaConfig
from mfa_gate.exceptions import ConfigurationError
from mfa_gate.registry import AuthenticationMethod, AuthenticationMethodRegistry


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def registry() -> AuthenticationMethodRegistry:
    """Registry with four methods of increasing strength."""
    return AuthenticationMethodRegistry(
        [
            AuthenticationMethod("fingerprint", 1),
            AuthenticationMethod("retina_scan", 2),
            AuthenticationMethod("personal_attestation", 3),
            AuthenticationMethod("strong_two_factor", 4),
        ]
    )


# ============================================================================
# AuthenticationMethod
# ============================================================================


class TestAuthenticationMethod:
    """AuthenticationMethod ordering and immutability."""

    def test_higher_rank_is_stronger(self):
        # Arrange
        weak = AuthenticationMethod("fingerprint", 1)
        strong = AuthenticationMethod("strong_two_factor", 4)

        # Assert
        assert strong.is_stronger_than(weak)
        assert not weak.is_stronger_than(strong)
        assert weak < strong

    def test_is_immutable(self):
        method = AuthenticationMethod("fingerprint", 1)

        with pytest.raises(AttributeError):
            method.rank = 5  # type: ignore[misc]

    def test_equal_ranks_keep_input_order_when_sorted(self):
        # Arrange
        first = AuthenticationMethod("a", 2)
        second = AuthenticationMethod("b", 2)

        # Act
        ordered = sorted([first, second])

        # Assert
        assert [m.name for m in ordered] == ["a", "b"]


# ============================================================================
# AuthenticationMethodRegistry
# ============================================================================


class TestAuthenticationMethodRegistry:
    """Registry lookup and construction."""

    def test_contains_configured_methods(self, registry):
        assert registry.contains_method("retina_scan")
        assert "retina_scan" in registry
        assert len(registry) == 4

    def test_does_not_contain_unknown_method(self, registry):
        assert not registry.contains_method("unrecognized_authentication_method")
        assert not registry.contains_method(None)

    def test_lookup_is_case_sensitive(self, registry):
        assert not registry.contains_method("Strong_Two_Factor")

    def test_get_method_returns_configured_rank(self, registry):
        method = registry.get_method("strong_two_factor")

        assert method is not None
        assert method.rank == 4

    def test_get_method_unknown_returns_none(self, registry):
        assert registry.get_method("nope") is None

    def test_ranked_orders_weakest_first(self, registry):
        assert [m.name for m in registry.ranked()] == [
            "fingerprint",
            "retina_scan",
            "personal_attestation",
            "strong_two_factor",
        ]

    def test_strongest(self, registry):
        strongest = registry.strongest()

        assert strongest is not None
        assert strongest.name == "strong_two_factor"

    def test_empty_registry_is_valid(self):
        # Act
        registry = AuthenticationMethodRegistry()

        # Assert
        assert len(registry) == 0
        assert registry.strongest() is None
        assert not registry.contains_method("strong_two_factor")

    def test_duplicate_names_fail_fast(self):
        with pytest.raises(ConfigurationError, match="Duplicate authentication method name"):
            AuthenticationMethodRegistry(
                [
                    AuthenticationMethod("strong_two_factor", 1),
                    AuthenticationMethod("strong_two_factor", 2),
                ]
            )

    def test_iteration_preserves_registration_order(self, registry):
        assert [m.name for m in registry] == ["fingerprint", "retina_scan", "personal_attestation", "strong_two_factor"]

    def test_from_config(self):
        # Arrange
        config = MfaConfig(
            authentication_methods=[
                AuthenticationMethodConfig(name="sample_two_factor", rank=1),
                AuthenticationMethodConfig(name="strong_two_factor", rank=3),
            ]
        )

        # Act
        registry = AuthenticationMethodRegistry.from_config(config)

        # Assert
        assert registry.get_method("strong_two_factor") == AuthenticationMethod("strong_two_factor", 3)
        assert registry.get_method("sample_two_factor") == AuthenticationMethod("sample_two_factor", 1)
