"""Unit tests for DomainService."""

import pytest
from unittest.mock import AsyncMock, create_autospec

from identity.application.observability import DomainServiceProbe
from identity.application.services.domain_service import DomainService
from identity.domain.aggregates import Domain
from identity.domain.value_objects import DomainId
from identity.ports.exceptions import BadRequestError, ConflictError, NotFoundError
from identity.ports.repositories import (
    IDepartmentRepository,
    IDomainRepository,
    IUserRepository,
)


@pytest.fixture
def mock_domain_repository():
    repo = create_autospec(IDomainRepository, instance=True)
    repo.get_by_name = AsyncMock(return_value=None)
    repo.create = AsyncMock()
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_department_repository():
    repo = create_autospec(IDepartmentRepository, instance=True)
    repo.create = AsyncMock()
    return repo


@pytest.fixture
def mock_user_repository():
    repo = create_autospec(IUserRepository, instance=True)
    repo.count_by_domain = AsyncMock(return_value=0)
    return repo


@pytest.fixture
def mock_probe():
    return create_autospec(DomainServiceProbe, instance=True)


@pytest.fixture
def domain_service(
    mock_domain_repository, mock_department_repository, mock_user_repository, mock_probe
):
    return DomainService(
        domain_repository=mock_domain_repository,
        department_repository=mock_department_repository,
        user_repository=mock_user_repository,
        default_department_name="headquarters",
        probe=mock_probe,
    )


class TestCreateDomain:
    """Tests for create_domain."""

    @pytest.mark.asyncio
    async def test_bootstraps_default_department(
        self, domain_service, mock_domain_repository, mock_department_repository
    ):
        domain = await domain_service.create_domain(
            "acme", metadata={"region": "eu"}
        )

        assert domain.metadata == {"region": "eu"}
        mock_domain_repository.create.assert_awaited_once_with(domain)
        department = mock_department_repository.create.call_args[0][0]
        assert department.domain_id == domain.id
        assert department.name == "headquarters"

    @pytest.mark.asyncio
    async def test_duplicate_name_is_conflict(
        self, domain_service, mock_domain_repository, mock_department_repository
    ):
        mock_domain_repository.get_by_name = AsyncMock(
            return_value=Domain.create(name="acme")
        )

        with pytest.raises(ConflictError):
            await domain_service.create_domain("acme")

        mock_domain_repository.create.assert_not_called()
        mock_department_repository.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_bootstrap_removes_domain(
        self,
        domain_service,
        mock_domain_repository,
        mock_department_repository,
        mock_probe,
    ):
        """A domain without its default department is not left behind."""
        mock_department_repository.create = AsyncMock(
            side_effect=RuntimeError("insert failed")
        )

        with pytest.raises(RuntimeError, match="insert failed"):
            await domain_service.create_domain("acme")

        created = mock_domain_repository.create.call_args[0][0]
        mock_domain_repository.delete.assert_awaited_once_with(created.id)
        mock_probe.default_department_bootstrap_failed.assert_called_once_with(
            domain_id=created.id.value, error="insert failed"
        )


class TestGetDomain:
    """Tests for get_domain."""

    @pytest.mark.asyncio
    async def test_missing_domain_is_not_found(
        self, domain_service, mock_domain_repository
    ):
        mock_domain_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await domain_service.get_domain(DomainId.generate())


class TestDeleteDomain:
    """Tests for delete_domain."""

    @pytest.mark.asyncio
    async def test_deletes_domain_without_users(
        self, domain_service, mock_domain_repository
    ):
        domain = Domain.create(name="acme")
        mock_domain_repository.get_by_id = AsyncMock(return_value=domain)

        await domain_service.delete_domain(domain.id)

        mock_domain_repository.delete.assert_awaited_once_with(domain.id)

    @pytest.mark.asyncio
    async def test_refuses_domain_with_users(
        self, domain_service, mock_domain_repository, mock_user_repository, mock_probe
    ):
        domain = Domain.create(name="acme")
        mock_domain_repository.get_by_id = AsyncMock(return_value=domain)
        mock_user_repository.count_by_domain = AsyncMock(return_value=2)

        with pytest.raises(BadRequestError):
            await domain_service.delete_domain(domain.id)

        mock_domain_repository.delete.assert_not_called()
        mock_probe.domain_delete_refused.assert_called_once_with(
            domain_id=domain.id.value, user_count=2
        )
