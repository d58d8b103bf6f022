"""Target service extraction from protocol arguments.

Supports the two login argument styles the host accepts:

- CAS:      ?service=<url>[&ticket=<artifact>]
- SAML 1.1: ?TARGET=<url>[&SAMLart=<artifact>]

Extractors are tried in order; the first that finds a service id wins.
A request without any service id has no target service, and therefore
no MFA requirement.
"""

from __future__ import annotations

__all__ = [
    "CAS_ARGUMENTS",
    "DEFAULT_PROTOCOL_ARGUMENTS",
    "ProtocolArguments",
    "SAML_ARGUMENTS",
    "extract_target_service",
]

from collections.abc import Sequence
from dataclasses import dataclass

from mfa_gate.constants import (
    CAS_ARTIFACT_PARAMETER,
    CAS_SERVICE_PARAMETER,
    SAML_ARTIFACT_PARAMETER,
    SAML_TARGET_PARAMETER,
)
from mfa_gate.context.request import RequestContextProtocol
from mfa_gate.context.service import TargetService


@dataclass(frozen=True, slots=True)
class ProtocolArguments:
    """Parameter names one protocol uses for the target service.

    Attributes:
        protocol: Protocol label for logs.
        service_parameter: Parameter carrying the service id.
        artifact_parameter: Parameter carrying the protocol artifact.
    """

    protocol: str
    service_parameter: str
    artifact_parameter: str


CAS_ARGUMENTS = ProtocolArguments("cas", CAS_SERVICE_PARAMETER, CAS_ARTIFACT_PARAMETER)
SAML_ARGUMENTS = ProtocolArguments("saml", SAML_TARGET_PARAMETER, SAML_ARTIFACT_PARAMETER)

DEFAULT_PROTOCOL_ARGUMENTS: tuple[ProtocolArguments, ...] = (CAS_ARGUMENTS, SAML_ARGUMENTS)


def extract_target_service(
    request_context: RequestContextProtocol,
    protocols: Sequence[ProtocolArguments] = DEFAULT_PROTOCOL_ARGUMENTS,
) -> TargetService | None:
    """Build the TargetService descriptor from request parameters.

    Args:
        request_context: Current request.
        protocols: Argument styles to try, in order.

    Returns:
        TargetService for the first protocol whose service parameter is
        present, or None if the request names no service.
    """
    for arguments in protocols:
        service_id = request_context.get_parameter(arguments.service_parameter)
        if service_id is None:
            continue
        return TargetService(
            id=service_id,
            artifact_id=request_context.get_parameter(arguments.artifact_parameter),
        )
    return None
