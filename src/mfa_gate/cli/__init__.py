"""Command-line interface for mfa-gate.

Provides commands for validating configuration, listing supported
methods and dry-running a resolution.
"""

from .main import cli, main

__all__ = ["cli", "main"]
