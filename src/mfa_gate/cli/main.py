"""Main CLI entry point for mfa-gate.

Commands:
    config   - Configuration management (validate)
    methods  - List supported authentication methods
    resolve  - Dry-run method resolution for a login request

Subcommand help:
    mfa-gate COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys

import click

from mfa_gate import __version__

from .commands.config import config
from .commands.methods import methods
from .commands.resolve import resolve


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """mfa-gate: Multi-factor authentication method resolution."""
    if version:
        click.echo(f"mfa-gate {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(config)
cli.add_command(methods)
cli.add_command(resolve)


def main() -> None:
    """CLI entry point."""
    cli()
