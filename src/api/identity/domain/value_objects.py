"""Value objects for the identity domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from ulid import ULID


@dataclass(frozen=True)
class EntityId:
    """Opaque identifier shared by every identity aggregate.

    Identifiers coming from storage or callers are accepted verbatim (the
    service also hosts records created before ULIDs were used); new
    identifiers are generated as ULIDs for sortability.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(f"{type(self).__name__} cannot be empty")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create an identifier from a raw string.

        Raises:
            ValueError: If value is empty or blank
        """
        return cls(value=value.strip())


@dataclass(frozen=True)
class DomainId(EntityId):
    """Identifier for a Domain (tenant) aggregate."""


@dataclass(frozen=True)
class DepartmentId(EntityId):
    """Identifier for a Department aggregate."""


@dataclass(frozen=True)
class ProjectId(EntityId):
    """Identifier for a Project aggregate."""


@dataclass(frozen=True)
class UserId(EntityId):
    """Identifier for a User aggregate."""


@dataclass(frozen=True)
class RoleId(EntityId):
    """Identifier for a Role aggregate."""


@dataclass(frozen=True)
class ApplicationId(EntityId):
    """Identifier for an Application aggregate."""
