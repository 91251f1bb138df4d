"""Unit tests for the PostgreSQL identity repositories.

Sessions are mocked; the tests cover model mapping, commit/rollback
handling and the translation of unique-constraint violations.
"""

from datetime import UTC, datetime

import pytest
from unittest.mock import AsyncMock, MagicMock, create_autospec

from sqlalchemy.exc import IntegrityError

from identity.domain.aggregates import Domain, Role, User
from identity.domain.value_objects import (
    DepartmentId,
    DomainId,
    ProjectId,
    RoleId,
    UserId,
)
from identity.infrastructure import (
    DomainRepository,
    RoleRepository,
    UserRepository,
)
from identity.infrastructure.models import DomainModel, UserModel
from identity.infrastructure.observability import RepositoryProbe
from identity.ports.exceptions import ConflictError
from identity.ports.repositories import (
    IDomainRepository,
    IRoleRepository,
    IUserRepository,
)


def _integrity_error(constraint: str) -> IntegrityError:
    return IntegrityError(
        "INSERT ...",
        {},
        Exception(f'duplicate key value violates unique constraint "{constraint}"'),
    )


@pytest.fixture
def mock_session():
    """Create mock async session."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_probe():
    return create_autospec(RepositoryProbe, instance=True)


@pytest.fixture
def user_repository(mock_session, mock_probe):
    return UserRepository(session=mock_session, probe=mock_probe)


@pytest.fixture
def member():
    return User(
        id=UserId.generate(),
        domain_id=DomainId.generate(),
        account="alice",
        department_id=DepartmentId.generate(),
    )


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_repositories_implement_protocols(self, mock_session):
        assert isinstance(UserRepository(session=mock_session), IUserRepository)
        assert isinstance(DomainRepository(session=mock_session), IDomainRepository)
        assert isinstance(RoleRepository(session=mock_session), IRoleRepository)


class TestUserRepositoryCreate:
    """Tests for UserRepository.create."""

    @pytest.mark.asyncio
    async def test_adds_model_and_commits(
        self, user_repository, mock_session, mock_probe, member
    ):
        await user_repository.create(member)

        added = mock_session.add.call_args[0][0]
        assert isinstance(added, UserModel)
        assert added.id == member.id.value
        assert added.department_id == member.department_id.value
        mock_session.commit.assert_awaited_once()
        mock_probe.record_created.assert_called_once_with(
            kind="user", record_id=member.id.value
        )

    @pytest.mark.asyncio
    async def test_unique_violation_is_conflict(
        self, user_repository, mock_session, mock_probe, member
    ):
        mock_session.commit = AsyncMock(
            side_effect=_integrity_error("uq_users_domain_id_account")
        )

        with pytest.raises(ConflictError):
            await user_repository.create(member)

        mock_session.rollback.assert_awaited_once()
        mock_probe.duplicate_record.assert_called_once_with(kind="user", key="alice")

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(
        self, user_repository, mock_session, member
    ):
        mock_session.commit = AsyncMock(
            side_effect=_integrity_error("fk_users_department_id_departments")
        )

        with pytest.raises(IntegrityError):
            await user_repository.create(member)

        mock_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_user_without_department_is_rejected(
        self, user_repository, mock_session
    ):
        user = User.create(account="alice", domain_id=DomainId.generate())

        with pytest.raises(ValueError):
            await user_repository.create(user)

        mock_session.add.assert_not_called()


class TestUserRepositoryReads:
    """Tests for UserRepository lookups."""

    @pytest.mark.asyncio
    async def test_get_by_id_maps_model(self, user_repository, mock_session):
        model = UserModel(
            id="01USER",
            domain_id="01DOMAIN",
            account="alice",
            department_id="01DEPT",
            default_project_id=None,
            display_name="Alice",
            email="alice@example.com",
            last_login_at=None,
            last_login_ip=None,
            login_failed_times=0,
            login_success_times=3,
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )
        result = MagicMock()
        result.scalar_one_or_none.return_value = model
        mock_session.execute.return_value = result

        user = await user_repository.get_by_id(UserId(value="01USER"))

        assert user.id == UserId(value="01USER")
        assert user.domain_id == DomainId(value="01DOMAIN")
        assert user.department_id == DepartmentId(value="01DEPT")
        assert user.default_project_id is None
        assert user.login_success_times == 3
        assert user.domain is None

    @pytest.mark.asyncio
    async def test_get_by_id_returns_none_when_missing(
        self, user_repository, mock_session
    ):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        assert await user_repository.get_by_id(UserId.generate()) is None

    @pytest.mark.asyncio
    async def test_count_by_domain(self, user_repository, mock_session):
        result = MagicMock()
        result.scalar_one.return_value = 4
        mock_session.execute.return_value = result

        assert await user_repository.count_by_domain(DomainId.generate()) == 4


class TestUserRepositoryWrites:
    """Tests for deletes and relationship writes."""

    @pytest.mark.asyncio
    async def test_delete_reports_missing_row(
        self, user_repository, mock_session, mock_probe
    ):
        result = MagicMock()
        result.rowcount = 0
        mock_session.execute.return_value = result

        deleted = await user_repository.delete(DomainId.generate(), UserId.generate())

        assert deleted is False
        mock_probe.record_deleted.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_reports_removed_row(self, user_repository, mock_session):
        result = MagicMock()
        result.rowcount = 1
        mock_session.execute.return_value = result

        assert await user_repository.delete(DomainId.generate(), UserId.generate())
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_bind_role_commits(self, user_repository, mock_session):
        await user_repository.bind_role(
            DomainId.generate(), UserId.generate(), RoleId.generate()
        )

        mock_session.execute.assert_awaited_once()
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_membership_batches_skip_the_database(
        self, user_repository, mock_session
    ):
        await user_repository.add_users_to_project(ProjectId.generate(), [])
        await user_repository.remove_users_from_project(ProjectId.generate(), [])
        await user_repository.add_projects_to_user(
            DomainId.generate(), UserId.generate(), []
        )

        mock_session.execute.assert_not_called()
        mock_session.commit.assert_not_called()


class TestDomainRepository:
    """Tests for DomainRepository."""

    @pytest.mark.asyncio
    async def test_create_stores_metadata(self, mock_session):
        repository = DomainRepository(session=mock_session)
        domain = Domain.create(name="acme", metadata={"tier": "gold"})

        await repository.create(domain)

        added = mock_session.add.call_args[0][0]
        assert isinstance(added, DomainModel)
        assert added.domain_metadata == {"tier": "gold"}

    @pytest.mark.asyncio
    async def test_duplicate_name_is_conflict(self, mock_session):
        repository = DomainRepository(session=mock_session)
        mock_session.commit = AsyncMock(side_effect=_integrity_error("uq_domains_name"))

        with pytest.raises(ConflictError):
            await repository.create(Domain.create(name="acme"))


class TestRoleRepository:
    """Tests for RoleRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_name_is_conflict(self, mock_session):
        repository = RoleRepository(session=mock_session)
        mock_session.commit = AsyncMock(side_effect=_integrity_error("uq_roles_name"))

        with pytest.raises(ConflictError):
            await repository.create(Role.create(name="viewer"))

    @pytest.mark.asyncio
    async def test_list_role_user_ids(self, mock_session):
        repository = RoleRepository(session=mock_session)
        result = MagicMock()
        result.scalars.return_value.all.return_value = ["01A", "01B"]
        mock_session.execute.return_value = result

        user_ids = await repository.list_role_user_ids(RoleId.generate())

        assert user_ids == [UserId(value="01A"), UserId(value="01B")]
