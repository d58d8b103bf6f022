"""Method source resolvers.

Each resolver proposes a candidate method from one data source, or
abstains. The coordinator runs them in a fixed precedence order.

Structure:
    protocol.py           - MethodResolverProtocol
    request_parameter.py  - explicit client request (highest precedence)
    registered_service.py - service-level policy
    principal_attribute.py - user-level policy
    mfa_role.py           - role rules evaluated against user attributes
"""

from mfa_gate.resolvers.mfa_role import MethodContext, MfaRoleProcessor, MfaRoleResolver, RoleSelection
from mfa_gate.resolvers.principal_attribute import PrincipalAttributeMethodResolver
from mfa_gate.resolvers.protocol import MethodResolverProtocol
from mfa_gate.resolvers.registered_service import RegisteredServiceMethodResolver, declares_mfa_roles
from mfa_gate.resolvers.request_parameter import RequestParameterMethodResolver

__all__ = [
    "MethodContext",
    "MethodResolverProtocol",
    "MfaRoleProcessor",
    "MfaRoleResolver",
    "PrincipalAttributeMethodResolver",
    "RegisteredServiceMethodResolver",
    "RequestParameterMethodResolver",
    "RoleSelection",
    "declares_mfa_roles",
]
