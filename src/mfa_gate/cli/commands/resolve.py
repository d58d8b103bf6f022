"""Resolve command for mfa-gate CLI.

Dry-runs a resolution against the configured service definitions, as
the server would for a login request with the given parameters.
"""

from __future__ import annotations

__all__ = ["resolve"]

import sys
from pathlib import Path

import click

from mfa_gate.constants import CAS_SERVICE_PARAMETER, TICKET_GRANTING_TICKET_FLOW_KEY
from mfa_gate.context import (
    Authentication,
    InMemoryAuthenticationStore,
    MfaRequestContext,
    Principal,
    extract_target_service,
)
from mfa_gate.coordinator import build_coordinator
from mfa_gate.exceptions import ConfigurationError, ResolutionFailure, UnrecognizedAuthenticationMethodError
from mfa_gate.telemetry.setup import configure_logging

from ..options import config_path_option, load_config_or_exit
from ..styling import style_dim, style_error, style_label, style_success

# Exit code when the requested method is rejected
EXIT_REJECTED = 2

# Ticket id binding the simulated login to the flow
_DRY_RUN_TICKET = "TGT-dry-run"


def _parse_attributes(pairs: tuple[str, ...]) -> dict[str, list[str]]:
    attributes: dict[str, list[str]] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected NAME=VALUE, got '{pair}'", param_hint="--attribute")
        attributes.setdefault(name, []).append(value)
    return attributes


@click.command()
@config_path_option
@click.option("--service", "-s", "service_id", help="Target service URL")
@click.option("--authn-method", "-m", help="Explicitly requested method")
@click.option("--principal", help="Authenticated principal id")
@click.option(
    "--attribute",
    "-a",
    "attributes",
    multiple=True,
    help="Principal attribute NAME=VALUE (repeatable, requires --principal)",
)
def resolve(
    path: Path,
    service_id: str | None,
    authn_method: str | None,
    principal: str | None,
    attributes: tuple[str, ...],
) -> None:
    """Show which authentication method a login request would require.

    Exit codes:
        0: Resolved (MFA required or not)
        1: Config invalid or resolution failed
        2: Requested method is not supported
    """
    mfa_config = load_config_or_exit(path)
    if attributes and principal is None:
        raise click.UsageError("--attribute requires --principal")

    parameters: dict[str, str] = {}
    if service_id:
        parameters[CAS_SERVICE_PARAMETER] = service_id
    if authn_method:
        parameters[mfa_config.authn_method_parameter] = authn_method

    authentication = None
    authentications = InMemoryAuthenticationStore()
    flow_scope: dict[str, str] = {}
    if principal is not None:
        authentication = Authentication(
            principal=Principal(id=principal, attributes=_parse_attributes(attributes))
        )
        authentications.add(_DRY_RUN_TICKET, authentication)
        flow_scope[TICKET_GRANTING_TICKET_FLOW_KEY] = _DRY_RUN_TICKET

    try:
        coordinator = build_coordinator(
            mfa_config,
            authentications=authentications,
            event_logger=configure_logging(mfa_config),
        )
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)

    request_context = MfaRequestContext(parameters=parameters, flow_scope=flow_scope)
    target_service = extract_target_service(request_context)

    try:
        requirement = coordinator.resolve_required_method(authentication, target_service, request_context)
    except UnrecognizedAuthenticationMethodError as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(EXIT_REJECTED)
    except ResolutionFailure as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)

    if requirement is None:
        click.echo(style_dim("No MFA required."))
        return

    click.echo(style_success(f"MFA required: {requirement.method_name}"))
    click.echo(f"  {style_label('Rank')} {requirement.rank}")
    click.echo(f"  {style_label('Source')} {requirement.source.value}")
