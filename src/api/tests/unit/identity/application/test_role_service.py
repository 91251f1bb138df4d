"""Unit tests for RoleService."""

import pytest
from unittest.mock import AsyncMock, create_autospec

from identity.application.observability import RoleServiceProbe
from identity.application.services import AggregateCache
from identity.application.services.role_service import RoleService
from identity.domain.aggregates import Role
from identity.domain.value_objects import RoleId, UserId
from identity.ports.exceptions import ConflictError, NotFoundError
from identity.ports.repositories import IRoleRepository


@pytest.fixture
def mock_role_repository():
    repo = create_autospec(IRoleRepository, instance=True)
    repo.get_by_name = AsyncMock(return_value=None)
    repo.create = AsyncMock()
    return repo


@pytest.fixture
def mock_aggregate_cache():
    return create_autospec(AggregateCache, instance=True)


@pytest.fixture
def mock_probe():
    return create_autospec(RoleServiceProbe, instance=True)


@pytest.fixture
def role_service(mock_role_repository, mock_aggregate_cache, mock_probe):
    return RoleService(
        role_repository=mock_role_repository,
        aggregate_cache=mock_aggregate_cache,
        probe=mock_probe,
    )


class TestCreateRole:
    """Tests for create_role."""

    @pytest.mark.asyncio
    async def test_creates_role(self, role_service, mock_role_repository):
        role = await role_service.create_role("viewer", "read only")

        assert role.name == "viewer"
        assert role.description == "read only"
        mock_role_repository.create.assert_awaited_once_with(role)

    @pytest.mark.asyncio
    async def test_duplicate_name_is_conflict(
        self, role_service, mock_role_repository, mock_probe
    ):
        mock_role_repository.get_by_name = AsyncMock(
            return_value=Role.create(name="viewer")
        )

        with pytest.raises(ConflictError):
            await role_service.create_role("viewer")

        mock_role_repository.create.assert_not_called()
        mock_probe.duplicate_role_name.assert_called_once_with(name="viewer")

    @pytest.mark.asyncio
    async def test_blank_name_is_rejected(self, role_service, mock_role_repository):
        with pytest.raises(ValueError):
            await role_service.create_role("   ")

        mock_role_repository.get_by_name.assert_not_called()


class TestGetRole:
    """Tests for get_role."""

    @pytest.mark.asyncio
    async def test_missing_role_is_not_found(self, role_service, mock_role_repository):
        mock_role_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await role_service.get_role(RoleId.generate())


class TestDeleteRole:
    """Tests for delete_role."""

    @pytest.mark.asyncio
    async def test_evicts_former_holders(
        self, role_service, mock_role_repository, mock_aggregate_cache, mock_probe
    ):
        role_id = RoleId.generate()
        holders = [UserId.generate(), UserId.generate()]
        mock_role_repository.list_role_user_ids = AsyncMock(return_value=holders)
        mock_role_repository.delete = AsyncMock(return_value=True)

        await role_service.delete_role(role_id)

        mock_aggregate_cache.evict_users.assert_awaited_once_with(holders)
        mock_probe.role_deleted.assert_called_once_with(
            role_id=role_id.value, evicted_users=2
        )

    @pytest.mark.asyncio
    async def test_missing_role_is_not_found(
        self, role_service, mock_role_repository, mock_aggregate_cache
    ):
        mock_role_repository.list_role_user_ids = AsyncMock(return_value=[])
        mock_role_repository.delete = AsyncMock(return_value=False)

        with pytest.raises(NotFoundError):
            await role_service.delete_role(RoleId.generate())

        mock_aggregate_cache.evict_users.assert_not_called()
