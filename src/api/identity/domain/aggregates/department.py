"""Department aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from identity.domain.aggregates.domain import _require_name
from identity.domain.value_objects import DepartmentId, DomainId

DEFAULT_DEPARTMENT_NAME = "default"


@dataclass
class Department:
    """Organizational unit scoped to exactly one Domain.

    A department declares the projects and roles its members inherit when
    they join. One department per domain is the default department, found
    by its well-known name.
    """

    id: DepartmentId
    domain_id: DomainId
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls, domain_id: DomainId, name: str, description: str = ""
    ) -> Department:
        """Factory method for creating a new department in a domain."""
        return cls(
            id=DepartmentId.generate(),
            domain_id=domain_id,
            name=_require_name(name, "Department"),
            description=description,
        )

    def is_default(self, default_name: str) -> bool:
        """Check whether this is its domain's default department."""
        return self.name == default_name
