"""Project aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from identity.domain.aggregates.domain import _require_name
from identity.domain.value_objects import DomainId, ProjectId


@dataclass
class Project:
    """Resource scope a user can belong to, independent of reporting structure."""

    id: ProjectId
    domain_id: DomainId
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, domain_id: DomainId, name: str, description: str = "") -> Project:
        """Factory method for creating a new project in a domain."""
        return cls(
            id=ProjectId.generate(),
            domain_id=domain_id,
            name=_require_name(name, "Project"),
            description=description,
        )
