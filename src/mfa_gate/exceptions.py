"""Custom exceptions for mfa-gate.

Exceptions are organized into two categories:

Recoverable Errors (request fails, server continues):
    - UnrecognizedAuthenticationMethodError: Requested method is not supported,
      host flow renders an error view

Critical Failures (resolution cannot be trusted):
    - CriticalSecurityFailure: Base for unrecoverable failures
    - ResolutionFailure: A method source crashed during resolution
    - ConfigurationError: Method configuration is invalid (startup only)

Usage:
    from mfa_gate.exceptions import UnrecognizedAuthenticationMethodError
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "CriticalSecurityFailure",
    "ResolutionFailure",
    "UNRECOGNIZED_METHOD_CODE",
    "UnrecognizedAuthenticationMethodError",
]

from typing import Any

# =============================================================================
# Recoverable Errors (host flow presents an error view)
# =============================================================================

# Error code handed to the host flow for its error view
UNRECOGNIZED_METHOD_CODE = "UNRECOGNIZED_AUTHENTICATION_METHOD"


class UnrecognizedAuthenticationMethodError(Exception):
    """Raised when the selected authentication method is not supported.

    Raised at most once per request: the verifier records a rejection
    marker on the request context before raising, and a repeated
    verification of the same request passes through silently.

    Attributes:
        code: Stable error code for the host's error view.
        method: The offending method name as received.
        service_id: Identifier of the target service.
    """

    code: str = UNRECOGNIZED_METHOD_CODE

    def __init__(self, method: str, service_id: str | None) -> None:
        """Initialize UnrecognizedAuthenticationMethodError.

        Args:
            method: The unsupported method name.
            service_id: Identifier of the service the user tried to reach.
        """
        self.method = method
        self.service_id = service_id
        self.message = f"Authentication method '{method}' is not supported"
        super().__init__(self.message)

    def to_error_view(self) -> dict[str, Any]:
        """Build the model the host flow needs to render an error view."""
        view: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "method": self.method,
        }
        if self.service_id is not None:
            view["service_id"] = self.service_id
        return view

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"UnrecognizedAuthenticationMethodError(method={self.method!r}, service_id={self.service_id!r})"

    def __str__(self) -> str:
        """Return human-readable string representation."""
        return self.message


# =============================================================================
# Critical Failures (cannot resolve reliably - fail closed)
# =============================================================================


class CriticalSecurityFailure(Exception):
    """Base exception for failures where no trustworthy decision exists.

    These are never converted into "no MFA required". A host that catches
    one must deny the request (or refuse to start, for configuration).

    Attributes:
        exit_code: Process exit code when raised at startup.
        failure_type: Category string for logging.
    """

    exit_code: int = 1
    failure_type: str = "unknown"


class ResolutionFailure(CriticalSecurityFailure):
    """Method resolution failed unexpectedly.

    Raised when a resolver or one of the host collaborators it calls
    raises during resolution. The request must not proceed without MFA.
    """

    exit_code = 11
    failure_type = "resolution_failure"


class ConfigurationError(CriticalSecurityFailure):
    """Method configuration is invalid.

    Raised when:
    - Two methods share the same name
    - The default method is not a configured method
    - Config file exists but fails validation

    Exit code 16 indicates configuration failure.
    """

    exit_code = 16
    failure_type = "configuration_failure"
