"""Domain (tenant) application service for the identity bounded context."""

from __future__ import annotations

from identity.application.observability import (
    DefaultDomainServiceProbe,
    DomainServiceProbe,
)
from identity.application.value_objects import lookup
from identity.domain.aggregates import Department, Domain
from identity.domain.aggregates.department import DEFAULT_DEPARTMENT_NAME
from identity.domain.value_objects import DomainId
from identity.ports.exceptions import BadRequestError, ConflictError, NotFoundError
from identity.ports.repositories import (
    IDepartmentRepository,
    IDomainRepository,
    IUserRepository,
)


class DomainService:
    """Application service for tenant lifecycle.

    A domain is only usable once its default department exists, so creation
    provisions both. If the default department cannot be created the new
    domain is deleted again and the error propagates.
    """

    def __init__(
        self,
        domain_repository: IDomainRepository,
        department_repository: IDepartmentRepository,
        user_repository: IUserRepository,
        default_department_name: str = DEFAULT_DEPARTMENT_NAME,
        probe: DomainServiceProbe | None = None,
    ):
        self._domain_repository = domain_repository
        self._department_repository = department_repository
        self._user_repository = user_repository
        self._default_department_name = default_department_name
        self._probe = probe or DefaultDomainServiceProbe()

    async def create_domain(
        self,
        name: str,
        description: str = "",
        metadata: dict[str, str] | None = None,
    ) -> Domain:
        """Create a domain together with its default department.

        Raises:
            ConflictError: If the domain name is taken
            ValueError: If the name is empty
        """
        domain = Domain.create(name=name, description=description, metadata=metadata)

        existing = await lookup(self._domain_repository.get_by_name(domain.name))
        if existing.is_found:
            self._probe.duplicate_domain_name(name=domain.name)
            raise ConflictError(f"domain {domain.name} already exists")
        existing.raise_for_failure()

        await self._domain_repository.create(domain)

        department = Department.create(
            domain_id=domain.id,
            name=self._default_department_name,
            description=f"Default department of {domain.name}",
        )
        try:
            await self._department_repository.create(department)
        except Exception as e:
            self._probe.default_department_bootstrap_failed(
                domain_id=domain.id.value, error=str(e)
            )
            await self._domain_repository.delete(domain.id)
            raise

        self._probe.domain_created(
            domain_id=domain.id.value,
            name=domain.name,
            default_department_id=department.id.value,
        )
        return domain

    async def get_domain(self, domain_id: DomainId) -> Domain:
        """Return a domain.

        Raises:
            NotFoundError: If the domain does not exist
        """
        domain = await self._domain_repository.get_by_id(domain_id)
        if domain is None:
            self._probe.domain_not_found(domain_id=domain_id.value)
            raise NotFoundError(f"domain {domain_id} not found")
        return domain

    async def list_domains(self) -> list[Domain]:
        domains = await self._domain_repository.list_all()
        self._probe.domains_listed(count=len(domains))
        return domains

    async def delete_domain(self, domain_id: DomainId) -> None:
        """Delete a domain that has no users left.

        Departments and projects are removed with the domain.

        Raises:
            NotFoundError: If the domain does not exist
            BadRequestError: If users remain in the domain
        """
        await self.get_domain(domain_id)

        user_count = await self._user_repository.count_by_domain(domain_id)
        if user_count > 0:
            self._probe.domain_delete_refused(
                domain_id=domain_id.value, user_count=user_count
            )
            raise BadRequestError(
                f"domain {domain_id} still has {user_count} users"
            )

        if not await self._domain_repository.delete(domain_id):
            self._probe.domain_not_found(domain_id=domain_id.value)
            raise NotFoundError(f"domain {domain_id} not found")

        self._probe.domain_deleted(domain_id=domain_id.value)
