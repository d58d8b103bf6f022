"""Host collaborator boundary.

The resolution engine performs no I/O of its own. Everything it knows
about the request, the target service and the logged-in user comes
through the interfaces in this package.

Structure:
    authentication.py - Principal, Authentication, AuthenticationStore (WHO)
    service.py        - ServiceDefinition, ServiceRegistry, TargetService (WHERE)
    request.py        - RequestContextProtocol, MfaRequestContext (THIS REQUEST)
    extraction.py     - TargetService from CAS / SAML arguments
"""

from mfa_gate.context.authentication import (
    Authentication,
    AuthenticationStore,
    InMemoryAuthenticationStore,
    Principal,
)
from mfa_gate.context.extraction import (
    CAS_ARGUMENTS,
    DEFAULT_PROTOCOL_ARGUMENTS,
    SAML_ARGUMENTS,
    ProtocolArguments,
    extract_target_service,
)
from mfa_gate.context.request import MfaRequestContext, RequestContextProtocol
from mfa_gate.context.service import (
    InMemoryServiceRegistry,
    ServiceDefinition,
    ServiceRegistry,
    TargetService,
)

__all__ = [
    # Authentication (WHO)
    "Authentication",
    "AuthenticationStore",
    "InMemoryAuthenticationStore",
    "Principal",
    # Service (WHERE)
    "InMemoryServiceRegistry",
    "ServiceDefinition",
    "ServiceRegistry",
    "TargetService",
    # Request
    "MfaRequestContext",
    "RequestContextProtocol",
    # Extraction
    "CAS_ARGUMENTS",
    "DEFAULT_PROTOCOL_ARGUMENTS",
    "ProtocolArguments",
    "SAML_ARGUMENTS",
    "extract_target_service",
]
