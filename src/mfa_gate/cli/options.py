"""Shared CLI options and config loading."""

from __future__ import annotations

__all__ = ["config_path_option", "load_config_or_exit"]

import sys
from pathlib import Path

import click

from mfa_gate.config import MfaConfig
from mfa_gate.exceptions import ConfigurationError

from .styling import style_error

config_path_option = click.option(
    "--path",
    "-p",
    "path",
    required=True,
    envvar="MFA_GATE_CONFIG",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (or MFA_GATE_CONFIG)",
)


def load_config_or_exit(path: Path) -> MfaConfig:
    """Load configuration, printing the error and exiting 1 on failure."""
    try:
        return MfaConfig.load_from_file(path)
    except (FileNotFoundError, ValueError, ConfigurationError) as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)
