"""Registry of supported authentication methods.

The registry is built once at startup from configuration and is read-only
afterwards, so it can be shared by any number of concurrent requests
without locking. An empty registry is valid and means MFA is never
required: every candidate is rejected by the verifier.

Ranks express relative strength: a higher rank is a stronger method.
"""

from __future__ import annotations

__all__ = [
    "AuthenticationMethod",
    "AuthenticationMethodRegistry",
]

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from mfa_gate.exceptions import ConfigurationError

if TYPE_CHECKING:
    from mfa_gate.config import MfaConfig


@dataclass(frozen=True, slots=True)
class AuthenticationMethod:
    """A named, ranked authentication method.

    Ordering compares rank only. Equal ranks compare equal for sorting,
    so stable sorts keep registration order as the tie-break.

    Attributes:
        name: Unique method identifier (e.g. "strong_two_factor").
        rank: Relative strength, higher is stronger.
    """

    name: str
    rank: int

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AuthenticationMethod):
            return NotImplemented
        return self.rank < other.rank

    def is_stronger_than(self, other: AuthenticationMethod) -> bool:
        """Check whether this method outranks another."""
        return self.rank > other.rank


class AuthenticationMethodRegistry:
    """Immutable mapping of method name to AuthenticationMethod.

    Construct explicitly and pass to the verifier and resolvers that need it.
    There is no mutation API.
    """

    def __init__(self, methods: Iterable[AuthenticationMethod] = ()) -> None:
        """Build the registry.

        Args:
            methods: Supported methods. Names must be unique.

        Raises:
            ConfigurationError: If two methods share a name.
        """
        by_name: dict[str, AuthenticationMethod] = {}
        for method in methods:
            if method.name in by_name:
                raise ConfigurationError(f"Duplicate authentication method name: '{method.name}'")
            by_name[method.name] = method
        self._methods = MappingProxyType(by_name)

    @classmethod
    def from_config(cls, config: MfaConfig) -> AuthenticationMethodRegistry:
        """Build a registry from validated configuration."""
        return cls(AuthenticationMethod(name=m.name, rank=m.rank) for m in config.authentication_methods)

    def contains_method(self, name: str | None) -> bool:
        """Check whether a method name is supported.

        Args:
            name: Method name to look up (None is never supported).

        Returns:
            True if the registry holds a method with exactly this name.
        """
        if name is None:
            return False
        return name in self._methods

    def get_method(self, name: str) -> AuthenticationMethod | None:
        """Get a method by name, or None if it is not supported."""
        return self._methods.get(name)

    def ranked(self) -> list[AuthenticationMethod]:
        """Methods from weakest to strongest, registration order on rank ties."""
        return sorted(self._methods.values())

    def strongest(self) -> AuthenticationMethod | None:
        """The highest ranked method, or None for an empty registry."""
        ranked = self.ranked()
        return ranked[-1] if ranked else None

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __iter__(self) -> Iterator[AuthenticationMethod]:
        return iter(self._methods.values())

    def __len__(self) -> int:
        return len(self._methods)

    def __repr__(self) -> str:
        return f"AuthenticationMethodRegistry({list(self._methods.values())!r})"
