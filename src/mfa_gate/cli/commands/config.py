"""Config command group for mfa-gate CLI."""

from __future__ import annotations

__all__ = ["config"]

import sys
from pathlib import Path

import click

from mfa_gate.exceptions import ConfigurationError
from mfa_gate.registry import AuthenticationMethodRegistry

from ..options import config_path_option, load_config_or_exit
from ..styling import style_error, style_success


@click.group()
def config() -> None:
    """Configuration commands."""
    pass


@config.command("validate")
@config_path_option
def config_validate(path: Path) -> None:
    """Validate configuration file.

    Checks the config file for:
    - Valid JSON syntax
    - Schema validation (method names, ranks, services)
    - Unique method names and a known default method

    Exit codes:
        0: Config is valid
        1: Config is invalid or not found
    """
    mfa_config = load_config_or_exit(path)
    try:
        registry = AuthenticationMethodRegistry.from_config(mfa_config)
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)

    count = len(registry)
    click.echo(style_success(f"Config valid: {path}"))
    click.echo(f"  {count} authentication method{'s' if count != 1 else ''} defined")
    click.echo(f"  Default method: {mfa_config.default_authentication_method or 'none'}")
    click.echo(f"  {len(mfa_config.services)} service definition{'s' if len(mfa_config.services) != 1 else ''}")
