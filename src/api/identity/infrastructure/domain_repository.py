"""PostgreSQL implementation of IDomainRepository.

Every write commits on its own: each store call is one atomic unit of
work, and nothing spans calls.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity.domain.aggregates import Domain
from identity.domain.value_objects import DomainId
from identity.infrastructure.models import DomainModel
from identity.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from identity.ports.exceptions import ConflictError
from identity.ports.repositories import IDomainRepository


def _to_domain(model: DomainModel) -> Domain:
    return Domain(
        id=DomainId(value=model.id),
        name=model.name,
        description=model.description,
        metadata=dict(model.domain_metadata or {}),
        created_at=model.created_at,
    )


class DomainRepository(IDomainRepository):
    """Repository managing PostgreSQL storage for Domain records."""

    def __init__(
        self, session: AsyncSession, probe: RepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultRepositoryProbe()

    async def create(self, domain: Domain) -> None:
        """Insert a domain.

        Raises:
            ConflictError: If the domain name already exists
        """
        self._session.add(
            DomainModel(
                id=domain.id.value,
                name=domain.name,
                description=domain.description,
                domain_metadata=dict(domain.metadata),
                created_at=domain.created_at,
            )
        )
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            if "uq_domains_name" in str(e):
                self._probe.duplicate_record(kind="domain", key=domain.name)
                raise ConflictError(f"domain {domain.name} already exists") from e
            raise

        self._probe.record_created(kind="domain", record_id=domain.id.value)

    async def get_by_id(self, domain_id: DomainId) -> Domain | None:
        stmt = select(DomainModel).where(DomainModel.id == domain_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model is not None else None

    async def get_by_name(self, name: str) -> Domain | None:
        stmt = select(DomainModel).where(DomainModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model is not None else None

    async def list_all(self) -> list[Domain]:
        stmt = select(DomainModel).order_by(DomainModel.created_at)
        result = await self._session.execute(stmt)
        return [_to_domain(model) for model in result.scalars().all()]

    async def delete(self, domain_id: DomainId) -> bool:
        """Delete a domain; departments and projects go with it (CASCADE).

        Returns:
            True if deleted, False if not found
        """
        stmt = delete(DomainModel).where(DomainModel.id == domain_id.value)
        result = await self._session.execute(stmt)
        await self._session.commit()

        if result.rowcount == 0:
            return False

        self._probe.record_deleted(kind="domain", record_id=domain_id.value)
        return True
