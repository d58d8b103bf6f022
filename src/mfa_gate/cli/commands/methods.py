"""Methods command for mfa-gate CLI."""

from __future__ import annotations

__all__ = ["methods"]

import json
from pathlib import Path

import click

from mfa_gate.registry import AuthenticationMethodRegistry

from ..options import config_path_option, load_config_or_exit
from ..styling import style_dim, style_label


@click.command()
@config_path_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def methods(path: Path, as_json: bool) -> None:
    """List supported authentication methods, strongest last."""
    registry = AuthenticationMethodRegistry.from_config(load_config_or_exit(path))
    ranked = registry.ranked()

    if as_json:
        click.echo(json.dumps([{"name": m.name, "rank": m.rank} for m in ranked], indent=2))
        return

    if not ranked:
        click.echo(style_dim("No authentication methods configured. MFA is never required."))
        return

    click.echo(style_label("Authentication methods"))
    for method in ranked:
        click.echo(f"  {method.rank:>3}  {method.name}")

    strongest = registry.strongest()
    if strongest is not None:
        click.echo(f"{style_label('Strongest')} {strongest.name}")
