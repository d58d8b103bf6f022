"""Application-wide constants for mfa-gate.

Names of request parameters, service properties and flow attributes shared
with the host server. For per-deployment settings, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Request parameters
    "DEFAULT_AUTHN_METHOD_PARAMETER",
    "CAS_SERVICE_PARAMETER",
    "CAS_ARTIFACT_PARAMETER",
    "SAML_TARGET_PARAMETER",
    "SAML_ARTIFACT_PARAMETER",
    # Service definition properties
    "DEFAULT_SERVICE_METHOD_PROPERTY",
    "MFA_ROLE_ATTRIBUTE_NAME_PROPERTY",
    "MFA_ROLE_ATTRIBUTE_PATTERN_PROPERTY",
    # Principal attributes
    "DEFAULT_PRINCIPAL_METHOD_ATTRIBUTE",
    # Flow / request scope keys
    "TICKET_GRANTING_TICKET_FLOW_KEY",
    # Log files
    "RESOLUTION_LOG_FILENAME",
    "SYSTEM_LOG_FILENAME",
]

# =============================================================================
# Application identity
# =============================================================================

APP_NAME = "mfa-gate"

# =============================================================================
# Request parameters
# =============================================================================

# Explicit method requested by the client, e.g. ?authn_method=strong_two_factor
DEFAULT_AUTHN_METHOD_PARAMETER = "authn_method"

# CAS protocol: target service URL and service ticket artifact
CAS_SERVICE_PARAMETER = "service"
CAS_ARTIFACT_PARAMETER = "ticket"

# SAML 1.1 protocol: target URL and artifact
SAML_TARGET_PARAMETER = "TARGET"
SAML_ARTIFACT_PARAMETER = "SAMLart"

# =============================================================================
# Service definition properties
# =============================================================================

DEFAULT_SERVICE_METHOD_PROPERTY = "authn_method"

# Presence of either property hands the decision over to the role resolver
MFA_ROLE_ATTRIBUTE_NAME_PROPERTY = "mfa_attribute_name"
MFA_ROLE_ATTRIBUTE_PATTERN_PROPERTY = "mfa_attribute_pattern"

# =============================================================================
# Principal attributes
# =============================================================================

DEFAULT_PRINCIPAL_METHOD_ATTRIBUTE = "authn_method"

# =============================================================================
# Flow / request scope
# =============================================================================

TICKET_GRANTING_TICKET_FLOW_KEY = "ticketGrantingTicketId"

# =============================================================================
# Log files (relative to configured log_dir)
# =============================================================================

RESOLUTION_LOG_FILENAME = "audit/resolutions.jsonl"
SYSTEM_LOG_FILENAME = "system/system.jsonl"
