"""Request parameter resolver - the method the client asked for explicitly."""

from __future__ import annotations

__all__ = ["RequestParameterMethodResolver"]

from mfa_gate.constants import DEFAULT_AUTHN_METHOD_PARAMETER
from mfa_gate.context import Authentication, RequestContextProtocol, TargetService
from mfa_gate.requirement import AuthenticationMethodSource
from mfa_gate.telemetry.system_logger import get_system_logger


class RequestParameterMethodResolver:
    """Reads the method name from a request parameter (e.g. ?authn_method=...)."""

    source = AuthenticationMethodSource.REQUEST_PARAMETER

    def __init__(self, parameter_name: str = DEFAULT_AUTHN_METHOD_PARAMETER) -> None:
        self.parameter_name = parameter_name

    def resolve(
        self,
        authentication: Authentication | None,
        target_service: TargetService,
        request_context: RequestContextProtocol,
    ) -> str | None:
        method = request_context.get_parameter(self.parameter_name)
        if method is None:
            return None
        get_system_logger().debug(
            {
                "event": "method_from_request_parameter",
                "message": f"Request parameter '{self.parameter_name}' asks for '{method}'",
                "request_id": request_context.request_id,
            }
        )
        return method
