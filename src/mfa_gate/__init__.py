"""mfa-gate: multi-factor authentication method resolution for SSO servers.

Decides, for a service-access attempt, whether a stronger authentication
method is required, which one, and whether the deployment supports it.

Structure:
    registry.py      - Supported methods (name + rank)
    verifier.py      - Membership check with one-shot rejection signaling
    resolvers/       - Independent method sources (request, service, role, principal)
    coordinator.py   - Fixed-precedence resolution producing an MfaRequirement
    context/         - Narrow interfaces to the host server (request, services, authentications)
"""

__version__ = "0.1.0"

from mfa_gate.coordinator import ResolutionCoordinator, build_coordinator
from mfa_gate.exceptions import (
    ConfigurationError,
    ResolutionFailure,
    UnrecognizedAuthenticationMethodError,
)
from mfa_gate.registry import AuthenticationMethod, AuthenticationMethodRegistry
from mfa_gate.requirement import AuthenticationMethodSource, MfaRequirement
from mfa_gate.verifier import AuthenticationMethodVerifier

__all__ = [
    "__version__",
    "AuthenticationMethod",
    "AuthenticationMethodRegistry",
    "AuthenticationMethodSource",
    "AuthenticationMethodVerifier",
    "ConfigurationError",
    "MfaRequirement",
    "ResolutionCoordinator",
    "ResolutionFailure",
    "UnrecognizedAuthenticationMethodError",
    "build_coordinator",
]
