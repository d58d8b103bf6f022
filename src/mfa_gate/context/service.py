"""Service models - WHICH application the user is trying to reach.

ServiceDefinition is the host's registered policy for a service.
TargetService is the request-scoped descriptor of the service being
accessed; it carries the resolved MfaRequirement, if any.
"""

from __future__ import annotations

__all__ = [
    "InMemoryServiceRegistry",
    "ServiceDefinition",
    "ServiceRegistry",
    "TargetService",
]

import fnmatch
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from mfa_gate.requirement import MfaRequirement


class ServiceDefinition(BaseModel):
    """A registered service definition.

    Attributes:
        id: Definition identifier (for logs).
        service_id: Glob pattern matched against target service ids (case-sensitive).
        name: Optional human-readable name.
        properties: String-keyed policy properties (method, role attribute, role pattern).
    """

    id: str = Field(min_length=1)
    service_id: str = Field(min_length=1)
    name: str | None = None
    properties: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def matches(self, target_service_id: str) -> bool:
        """Check whether this definition applies to a target service id."""
        return fnmatch.fnmatchcase(target_service_id, self.service_id)

    def get_property(self, key: str) -> str | None:
        return self.properties.get(key)

    def has_property(self, key: str) -> bool:
        return key in self.properties


@runtime_checkable
class ServiceRegistry(Protocol):
    """Host interface for looking up service definitions."""

    def find_service_definition(self, service_id: str) -> ServiceDefinition | None:
        """Return the definition governing the service id, or None."""
        ...


class InMemoryServiceRegistry:
    """ServiceRegistry over a fixed list of definitions.

    Definitions are evaluated in order; the first whose pattern matches wins.
    """

    def __init__(self, definitions: Iterable[ServiceDefinition] = ()) -> None:
        self._definitions = tuple(definitions)

    def find_service_definition(self, service_id: str) -> ServiceDefinition | None:
        for definition in self._definitions:
            if definition.matches(service_id):
                return definition
        return None

    def __len__(self) -> int:
        return len(self._definitions)


@dataclass(slots=True)
class TargetService:
    """The service the current request is trying to reach.

    Owned by a single request. At most one MfaRequirement may be attached.

    Attributes:
        id: Target service identifier (usually the service URL).
        artifact_id: Protocol artifact carried alongside the service, if any.
        mfa_requirement: Requirement attached by the coordinator.
    """

    id: str
    artifact_id: str | None = None
    mfa_requirement: MfaRequirement | None = None

    def attach_requirement(self, requirement: MfaRequirement) -> None:
        """Attach the resolved requirement.

        Raises:
            ValueError: If a requirement is already attached.
        """
        if self.mfa_requirement is not None:
            raise ValueError(
                f"Service '{self.id}' already requires '{self.mfa_requirement.method_name}'; "
                "only one MFA requirement may be attached per request"
            )
        self.mfa_requirement = requirement

    @property
    def requires_mfa(self) -> bool:
        return self.mfa_requirement is not None
