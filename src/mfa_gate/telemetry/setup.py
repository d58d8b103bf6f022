"""Logging setup from configuration."""

from __future__ import annotations

__all__ = ["configure_logging"]

from mfa_gate.config import MfaConfig, get_resolution_log_path, get_system_log_path
from mfa_gate.telemetry.resolution_logger import ResolutionEventLogger
from mfa_gate.telemetry.system_logger import configure_system_logger_file, set_system_log_level


def configure_logging(config: MfaConfig) -> ResolutionEventLogger | None:
    """Apply logging configuration.

    Sets the system logger level and, when log_dir is configured, adds the
    system file handler and creates the resolution audit logger.

    Returns:
        ResolutionEventLogger writing to <log_dir>/audit/resolutions.jsonl,
        or None when log_dir is unset.
    """
    set_system_log_level(config.logging.log_level)

    system_log_path = get_system_log_path(config)
    if system_log_path is not None:
        configure_system_logger_file(system_log_path)

    resolution_log_path = get_resolution_log_path(config)
    if resolution_log_path is None:
        return None
    return ResolutionEventLogger.for_path(resolution_log_path)
