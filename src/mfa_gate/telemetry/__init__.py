"""Telemetry: operational system logging and the resolution audit log."""

from mfa_gate.telemetry.models import ResolutionEvent
from mfa_gate.telemetry.resolution_logger import ResolutionEventLogger, create_resolution_logger
from mfa_gate.telemetry.system_logger import (
    configure_system_logger_file,
    get_system_logger,
    set_system_log_level,
)

__all__ = [
    "ResolutionEvent",
    "ResolutionEventLogger",
    "configure_system_logger_file",
    "create_resolution_logger",
    "get_system_logger",
    "set_system_log_level",
]
