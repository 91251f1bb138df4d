"""Unit tests for ProjectService."""

import pytest
from unittest.mock import AsyncMock, create_autospec

from identity.application.observability import ProjectServiceProbe
from identity.application.services import AggregateCache
from identity.application.services.project_service import ProjectService
from identity.domain.aggregates import Department, Domain, Project, User
from identity.domain.value_objects import DomainId, ProjectId, UserId
from identity.ports.exceptions import (
    BadRequestError,
    ConflictError,
    InconsistentAggregateError,
    NotFoundError,
)
from identity.ports.repositories import (
    IDepartmentRepository,
    IDomainRepository,
    IProjectRepository,
    IRoleRepository,
    IUserRepository,
)


@pytest.fixture
def domain():
    return Domain.create(name="acme")


@pytest.fixture
def department(domain):
    return Department.create(domain_id=domain.id, name="general")


@pytest.fixture
def project(domain):
    return Project.create(domain_id=domain.id, name="P1")


@pytest.fixture
def members(domain, department):
    return [
        User(
            id=UserId.generate(),
            domain_id=domain.id,
            account=account,
            department_id=department.id,
        )
        for account in ("alice", "bob")
    ]


@pytest.fixture
def mock_project_repository(project):
    repo = create_autospec(IProjectRepository, instance=True)
    repo.get_by_id = AsyncMock(return_value=project)
    repo.get_by_name = AsyncMock(return_value=None)
    repo.create = AsyncMock()
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_user_repository(members):
    repo = create_autospec(IUserRepository, instance=True)
    repo.list_project_users = AsyncMock(return_value=members)
    repo.add_users_to_project = AsyncMock()
    repo.remove_users_from_project = AsyncMock()
    return repo


@pytest.fixture
def mock_domain_repository(domain):
    repo = create_autospec(IDomainRepository, instance=True)
    repo.get_by_id = AsyncMock(return_value=domain)
    return repo


@pytest.fixture
def mock_department_repository(department):
    repo = create_autospec(IDepartmentRepository, instance=True)
    repo.get_by_id = AsyncMock(return_value=department)
    return repo


@pytest.fixture
def mock_role_repository():
    repo = create_autospec(IRoleRepository, instance=True)
    repo.list_user_roles = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_aggregate_cache():
    """Mock AggregateCache; reads always miss."""
    cache = create_autospec(AggregateCache, instance=True)
    cache.get_project = AsyncMock(return_value=None)
    return cache


@pytest.fixture
def mock_probe():
    return create_autospec(ProjectServiceProbe, instance=True)


@pytest.fixture
def project_service(
    mock_project_repository,
    mock_user_repository,
    mock_domain_repository,
    mock_department_repository,
    mock_role_repository,
    mock_aggregate_cache,
    mock_probe,
):
    return ProjectService(
        project_repository=mock_project_repository,
        user_repository=mock_user_repository,
        domain_repository=mock_domain_repository,
        department_repository=mock_department_repository,
        role_repository=mock_role_repository,
        aggregate_cache=mock_aggregate_cache,
        probe=mock_probe,
    )


class TestCreateProject:
    """Tests for create_project."""

    @pytest.mark.asyncio
    async def test_creates_project_in_domain(
        self, project_service, mock_project_repository, mock_probe, domain
    ):
        result = await project_service.create_project(domain.id, "P2", "second")

        assert result.domain_id == domain.id
        assert result.name == "P2"
        mock_project_repository.create.assert_awaited_once_with(result)
        mock_probe.project_created.assert_called_once_with(
            project_id=result.id.value, domain_id=domain.id.value, name="P2"
        )

    @pytest.mark.asyncio
    async def test_duplicate_name_is_conflict(
        self, project_service, mock_project_repository, project, domain
    ):
        mock_project_repository.get_by_name = AsyncMock(return_value=project)

        with pytest.raises(ConflictError):
            await project_service.create_project(domain.id, "P1")

        mock_project_repository.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_domain_is_bad_request(
        self, project_service, mock_domain_repository, mock_project_repository
    ):
        mock_domain_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(BadRequestError):
            await project_service.create_project(DomainId.generate(), "P2")

        mock_project_repository.create.assert_not_called()


class TestGetProject:
    """Tests for get_project."""

    @pytest.mark.asyncio
    async def test_miss_reads_store_and_populates_cache(
        self, project_service, mock_aggregate_cache, project, domain
    ):
        result = await project_service.get_project(domain.id, project.id)

        assert result == project
        mock_aggregate_cache.put_project.assert_awaited_once_with(project)

    @pytest.mark.asyncio
    async def test_hit_skips_store(
        self,
        project_service,
        mock_aggregate_cache,
        mock_project_repository,
        mock_probe,
        project,
        domain,
    ):
        mock_aggregate_cache.get_project = AsyncMock(return_value=project)

        result = await project_service.get_project(domain.id, project.id)

        assert result == project
        mock_project_repository.get_by_id.assert_not_called()
        mock_probe.project_retrieved.assert_called_once_with(
            project_id=project.id.value, from_cache=True
        )

    @pytest.mark.asyncio
    async def test_project_of_another_domain_is_not_found(
        self, project_service, project
    ):
        with pytest.raises(NotFoundError):
            await project_service.get_project(DomainId.generate(), project.id)

    @pytest.mark.asyncio
    async def test_missing_project_is_not_found(
        self, project_service, mock_project_repository, mock_aggregate_cache, domain
    ):
        mock_project_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await project_service.get_project(domain.id, ProjectId.generate())

        mock_aggregate_cache.put_project.assert_not_called()


class TestDeleteProject:
    """Tests for delete_project."""

    @pytest.mark.asyncio
    async def test_evicts_project_and_former_members(
        self, project_service, mock_aggregate_cache, members, project, domain
    ):
        await project_service.delete_project(domain.id, project.id)

        mock_aggregate_cache.evict_project.assert_awaited_once_with(project.id)
        mock_aggregate_cache.evict_users.assert_awaited_once_with(
            [member.id for member in members]
        )

    @pytest.mark.asyncio
    async def test_missing_project_is_not_found(
        self, project_service, mock_project_repository, mock_aggregate_cache, domain
    ):
        mock_project_repository.delete = AsyncMock(return_value=False)

        with pytest.raises(NotFoundError):
            await project_service.delete_project(domain.id, ProjectId.generate())

        mock_aggregate_cache.evict_users.assert_not_called()


class TestProjectMembership:
    """Tests for add_users_to_project and remove_users_from_project."""

    @pytest.mark.asyncio
    async def test_empty_add_is_rejected_before_any_store_call(
        self,
        project_service,
        mock_project_repository,
        mock_user_repository,
        mock_aggregate_cache,
        project,
    ):
        with pytest.raises(BadRequestError, match="user ids are required"):
            await project_service.add_users_to_project(project.id, [])

        mock_project_repository.get_by_id.assert_not_called()
        mock_user_repository.add_users_to_project.assert_not_called()
        mock_aggregate_cache.evict_users.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_remove_is_rejected_before_any_store_call(
        self, project_service, mock_user_repository, project
    ):
        with pytest.raises(BadRequestError):
            await project_service.remove_users_from_project(project.id, [])

        mock_user_repository.remove_users_from_project.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_evicts_users_and_writes_once(
        self, project_service, mock_user_repository, mock_aggregate_cache, project
    ):
        user_ids = [UserId.generate(), UserId.generate()]

        await project_service.add_users_to_project(project.id, user_ids)

        mock_aggregate_cache.evict_users.assert_awaited_once_with(user_ids)
        mock_user_repository.add_users_to_project.assert_awaited_once_with(
            project.id, user_ids
        )

    @pytest.mark.asyncio
    async def test_remove_evicts_users_and_writes_once(
        self, project_service, mock_user_repository, mock_aggregate_cache, project
    ):
        user_ids = [UserId.generate()]

        await project_service.remove_users_from_project(project.id, user_ids)

        mock_aggregate_cache.evict_users.assert_awaited_once_with(user_ids)
        mock_user_repository.remove_users_from_project.assert_awaited_once_with(
            project.id, user_ids
        )

    @pytest.mark.asyncio
    async def test_project_of_another_domain_is_not_found(
        self, project_service, mock_user_repository, project
    ):
        with pytest.raises(NotFoundError):
            await project_service.add_users_to_project(
                project.id, [UserId.generate()], domain_id=DomainId.generate()
            )

        mock_user_repository.add_users_to_project.assert_not_called()


class TestListProjectUsers:
    """Tests for list_project_users."""

    @pytest.mark.asyncio
    async def test_hydrates_members_without_cache(
        self, project_service, mock_aggregate_cache, members, department, project
    ):
        result = await project_service.list_project_users(project.id)

        assert [u.account for u in result] == ["alice", "bob"]
        assert all(u.department == department for u in result)
        mock_aggregate_cache.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_one_dangling_member_fails_the_whole_list(
        self,
        project_service,
        mock_department_repository,
        mock_role_repository,
        department,
        project,
    ):
        """The second member's department is gone: nothing is returned."""
        mock_department_repository.get_by_id = AsyncMock(
            side_effect=[department, None]
        )

        with pytest.raises(InconsistentAggregateError):
            await project_service.list_project_users(project.id)

        assert mock_role_repository.list_user_roles.await_count == 1
