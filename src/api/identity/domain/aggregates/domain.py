"""Domain (tenant) aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from identity.domain.value_objects import DomainId


def _require_name(name: str, kind: str) -> str:
    name = name.strip()
    if not name:
        raise ValueError(f"{kind} name cannot be empty")
    if len(name) > 255:
        raise ValueError(f"{kind} name cannot exceed 255 characters")
    return name


@dataclass
class Domain:
    """Domain aggregate representing a tenant.

    Domains are the top-level isolation boundary. Every Department, Project
    and User record holds a reference to exactly one Domain.

    Business rules:
    - Domain names are globally unique
    - Every domain owns a default department (bootstrapped at creation)
    """

    id: DomainId
    name: str
    description: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        name: str,
        description: str = "",
        metadata: dict[str, str] | None = None,
    ) -> Domain:
        """Factory method for creating a new domain.

        Args:
            name: Globally unique domain name
            description: Free-form description
            metadata: Arbitrary string attributes

        Returns:
            A new Domain aggregate with a generated ID

        Raises:
            ValueError: If the name is empty or too long
        """
        return cls(
            id=DomainId.generate(),
            name=_require_name(name, "Domain"),
            description=description,
            metadata=dict(metadata or {}),
        )
