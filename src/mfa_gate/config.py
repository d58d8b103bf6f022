"""Deployment configuration for mfa-gate.

Defines the supported authentication methods, the names used to discover
a required method, and logging. Loaded once at startup; configuration
errors are fatal before any request is served.

Example usage:
    config = MfaConfig.load_from_file(Path("/etc/mfa-gate/config.json"))
    coordinator = build_coordinator(config, services, authentications)

Example file:
    {
      "authentication_methods": [
        {"name": "sample_two_factor", "rank": 1},
        {"name": "strong_two_factor", "rank": 2}
      ],
      "default_authentication_method": "sample_two_factor",
      "services": [
        {"id": "github", "service_id": "https://github.com/**",
         "properties": {"authn_method": "strong_two_factor"}}
      ]
    }
"""

from __future__ import annotations

__all__ = [
    "AuthenticationMethodConfig",
    "LoggingConfig",
    "MfaConfig",
    "get_resolution_log_path",
    "get_system_log_path",
]

import json
from pathlib import Path
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mfa_gate.constants import (
    DEFAULT_AUTHN_METHOD_PARAMETER,
    DEFAULT_PRINCIPAL_METHOD_ATTRIBUTE,
    DEFAULT_SERVICE_METHOD_PROPERTY,
    RESOLUTION_LOG_FILENAME,
    SYSTEM_LOG_FILENAME,
)
from mfa_gate.context.service import ServiceDefinition
from mfa_gate.utils.file_helpers import load_validated_json, require_file_exists


class AuthenticationMethodConfig(BaseModel):
    """One supported method.

    Attributes:
        name: Unique method name as it appears in requests and attributes.
        rank: Relative strength, higher is stronger.
    """

    name: str = Field(min_length=1)
    rank: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("name", mode="after")
    @classmethod
    def reject_blank_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Method name cannot be empty or whitespace-only")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        log_dir: Base directory for system and resolution logs. When unset,
            only console logging is active.
        log_level: Console verbosity of the system logger.
    """

    log_dir: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class MfaConfig(BaseModel):
    """Complete mfa-gate configuration.

    Attributes:
        authentication_methods: Supported methods. Empty means MFA is never required.
        default_authentication_method: Method required by registered services
            that declare none.
        authn_method_parameter: Request parameter carrying an explicit method.
        service_method_property: Service property carrying the service's method.
        principal_method_attribute: Principal attribute carrying the user's
            method. None disables the principal attribute source.
        role_selection: How the role resolver picks among several matches.
        services: Static service definitions, in evaluation order.
        logging: Logging configuration.
    """

    authentication_methods: list[AuthenticationMethodConfig] = Field(default_factory=list)
    default_authentication_method: str | None = None
    authn_method_parameter: str = Field(default=DEFAULT_AUTHN_METHOD_PARAMETER, min_length=1)
    service_method_property: str = Field(default=DEFAULT_SERVICE_METHOD_PROPERTY, min_length=1)
    principal_method_attribute: str | None = DEFAULT_PRINCIPAL_METHOD_ATTRIBUTE
    role_selection: Literal["first_match", "highest_rank"] = "first_match"
    services: list[ServiceDefinition] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_methods(self) -> Self:
        """Reject duplicate method names and an unknown default method."""
        names = [m.name for m in self.authentication_methods]
        if len(names) != len(set(names)):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Duplicate authentication method names: {duplicates}")

        if self.default_authentication_method is not None and self.default_authentication_method not in names:
            raise ValueError(
                f"Default authentication method '{self.default_authentication_method}' "
                "is not a configured authentication method"
            )

        service_ids = [s.id for s in self.services]
        if len(service_ids) != len(set(service_ids)):
            duplicates = sorted({i for i in service_ids if service_ids.count(i) > 1})
            raise ValueError(f"Duplicate service definition ids: {duplicates}")
        return self

    @classmethod
    def load_from_file(cls, config_path: Path) -> MfaConfig:
        """Load and validate configuration from a JSON file.

        Args:
            config_path: Path to the JSON configuration file.

        Returns:
            Validated MfaConfig.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid JSON or fails validation.
        """
        require_file_exists(config_path, file_type="configuration")
        return load_validated_json(config_path, cls, file_type="configuration")

    def save_to_file(self, config_path: Path) -> None:
        """Write configuration as formatted JSON."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)
            f.write("\n")


def get_resolution_log_path(config: MfaConfig) -> Path | None:
    """Path of the resolution audit log, or None when file logging is off."""
    if config.logging.log_dir is None:
        return None
    return Path(config.logging.log_dir).expanduser() / RESOLUTION_LOG_FILENAME


def get_system_log_path(config: MfaConfig) -> Path | None:
    """Path of the system log, or None when file logging is off."""
    if config.logging.log_dir is None:
        return None
    return Path(config.logging.log_dir).expanduser() / SYSTEM_LOG_FILENAME
