"""Role aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from identity.domain.aggregates.domain import _require_name
from identity.domain.value_objects import RoleId


@dataclass
class Role:
    """Named permission grouping.

    Roles are global and looked up by name. They are granted to users either
    directly or by declaring them on a department.
    """

    id: RoleId
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name: str, description: str = "") -> Role:
        """Factory method for creating a new role."""
        return cls(
            id=RoleId.generate(),
            name=_require_name(name, "Role"),
            description=description,
        )
