"""Unit tests for UserService.

The stores are mocked; the aggregate cache is a real AggregateCache over an
InMemoryCache so read-through and eviction behavior is exercised end to end.
"""

import pytest
from unittest.mock import AsyncMock, create_autospec

from identity.application.observability import UserServiceProbe
from identity.application.services import AggregateCache
from identity.application.services.user_service import UserService
from identity.application.value_objects import CachePolicy
from identity.domain.aggregates import Department, Domain, Project, Role, User
from identity.domain.value_objects import DomainId, UserId
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
from shared_kernel.caching import InMemoryCache


@pytest.fixture
def domain():
    return Domain.create(name="acme")


@pytest.fixture
def default_department(domain):
    return Department.create(domain_id=domain.id, name="default")


@pytest.fixture
def general(domain):
    return Department.create(domain_id=domain.id, name="general")


@pytest.fixture
def p1(domain):
    return Project.create(domain_id=domain.id, name="P1")


@pytest.fixture
def viewer():
    return Role.create(name="viewer")


@pytest.fixture
def mock_user_repository():
    """Create mock user repository with harmless write defaults."""
    repo = create_autospec(IUserRepository, instance=True)
    repo.get_by_account = AsyncMock(return_value=None)
    repo.create = AsyncMock()
    repo.add_projects_to_user = AsyncMock()
    repo.bind_role = AsyncMock()
    repo.unbind_role = AsyncMock()
    return repo


@pytest.fixture
def mock_domain_repository(domain):
    repo = create_autospec(IDomainRepository, instance=True)
    domains = {domain.id: domain}
    repo.get_by_id = AsyncMock(side_effect=lambda domain_id: domains.get(domain_id))
    return repo


@pytest.fixture
def mock_department_repository(default_department, general):
    repo = create_autospec(IDepartmentRepository, instance=True)
    departments = {default_department.id: default_department, general.id: general}
    repo.get_by_id = AsyncMock(
        side_effect=lambda department_id: departments.get(department_id)
    )
    repo.get_by_name = AsyncMock(return_value=default_department)
    return repo


@pytest.fixture
def mock_role_repository(viewer):
    repo = create_autospec(IRoleRepository, instance=True)
    repo.list_department_roles = AsyncMock(return_value=[viewer])
    repo.list_user_roles = AsyncMock(return_value=[viewer])
    repo.get_by_name = AsyncMock(return_value=viewer)
    return repo


@pytest.fixture
def mock_project_repository(p1):
    repo = create_autospec(IProjectRepository, instance=True)
    repo.list_department_projects = AsyncMock(return_value=[p1])
    repo.list_user_projects = AsyncMock(return_value=[p1])
    repo.get_by_id = AsyncMock(return_value=p1)
    return repo


@pytest.fixture
def cache():
    return InMemoryCache()


@pytest.fixture
def aggregate_cache(cache):
    return AggregateCache(cache=cache, policy=CachePolicy(ttl_seconds=60))


@pytest.fixture
def mock_probe():
    """Create mock user service probe."""
    return create_autospec(UserServiceProbe, instance=True)


@pytest.fixture
def user_service(
    mock_user_repository,
    mock_domain_repository,
    mock_department_repository,
    mock_role_repository,
    mock_project_repository,
    aggregate_cache,
    mock_probe,
):
    """Create UserService with mock stores and a real aggregate cache."""
    return UserService(
        user_repository=mock_user_repository,
        domain_repository=mock_domain_repository,
        department_repository=mock_department_repository,
        role_repository=mock_role_repository,
        project_repository=mock_project_repository,
        aggregate_cache=aggregate_cache,
        probe=mock_probe,
    )


@pytest.fixture
def stored_alice(domain, general):
    """Alice as the user store returns her: references only."""
    return User(
        id=UserId.generate(),
        domain_id=domain.id,
        account="alice",
        department_id=general.id,
    )


class TestUserServiceInit:
    """Tests for UserService initialization."""

    def test_uses_default_probe_when_not_provided(
        self,
        mock_user_repository,
        mock_domain_repository,
        mock_department_repository,
        mock_role_repository,
        mock_project_repository,
        aggregate_cache,
    ):
        """Service should create default probe when not provided."""
        service = UserService(
            user_repository=mock_user_repository,
            domain_repository=mock_domain_repository,
            department_repository=mock_department_repository,
            role_repository=mock_role_repository,
            project_repository=mock_project_repository,
            aggregate_cache=aggregate_cache,
        )
        assert service._probe is not None


class TestCreateMemberUser:
    """Tests for create_member_user."""

    @pytest.mark.asyncio
    async def test_applies_department_cascades(
        self,
        user_service,
        mock_user_repository,
        domain,
        general,
        p1,
        viewer,
    ):
        """A user created in a department inherits its projects and roles."""
        user = User.create(account="alice", domain_id=domain.id, department_id=general.id)

        result = await user_service.create_member_user(user)

        assert result.department == general
        assert result.domain == domain
        assert result.role_names == ["viewer"]
        mock_user_repository.create.assert_awaited_once_with(user)
        mock_user_repository.add_projects_to_user.assert_awaited_once_with(
            domain.id, user.id, [p1.id]
        )
        mock_user_repository.bind_role.assert_awaited_once_with(
            domain.id, user.id, viewer.id
        )

    @pytest.mark.asyncio
    async def test_projects_are_persisted_but_not_attached(
        self, user_service, domain, general
    ):
        """The returned aggregate does not re-read project memberships."""
        user = User.create(account="alice", domain_id=domain.id, department_id=general.id)

        result = await user_service.create_member_user(user)

        assert result.projects == []

    @pytest.mark.asyncio
    async def test_joins_default_department_when_none_given(
        self,
        user_service,
        mock_department_repository,
        domain,
        default_department,
    ):
        """Without a department the user joins the domain's default department."""
        user = User.create(account="bob", domain_id=domain.id)

        result = await user_service.create_member_user(user)

        mock_department_repository.get_by_name.assert_awaited_once_with(
            domain.id, "default"
        )
        assert result.department_id == default_department.id
        assert result.department == default_department

    @pytest.mark.asyncio
    async def test_missing_default_department_is_bad_request(
        self,
        user_service,
        mock_user_repository,
        mock_department_repository,
        mock_probe,
        domain,
    ):
        """No user is written when the default department cannot be found."""
        mock_department_repository.get_by_name = AsyncMock(return_value=None)
        user = User.create(account="bob", domain_id=domain.id)

        with pytest.raises(BadRequestError):
            await user_service.create_member_user(user)

        mock_user_repository.create.assert_not_called()
        mock_probe.default_department_missing.assert_called_once_with(
            domain_id=domain.id.value, department_name="default"
        )

    @pytest.mark.asyncio
    async def test_department_of_another_domain_is_bad_request(
        self, user_service, mock_user_repository, mock_department_repository
    ):
        """A department outside the user's domain cannot be joined."""
        foreign = Department.create(domain_id=DomainId.generate(), name="sales")
        mock_department_repository.get_by_id = AsyncMock(return_value=foreign)
        user = User.create(
            account="carol", domain_id=DomainId.generate(), department_id=foreign.id
        )

        with pytest.raises(BadRequestError, match="not exist"):
            await user_service.create_member_user(user)

        mock_user_repository.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_account_is_conflict(
        self, user_service, mock_user_repository, mock_probe, stored_alice, domain
    ):
        """An existing account in the domain is rejected before any write."""
        mock_user_repository.get_by_account = AsyncMock(return_value=stored_alice)
        user = User.create(account="alice", domain_id=domain.id)

        with pytest.raises(ConflictError):
            await user_service.create_member_user(user)

        mock_user_repository.create.assert_not_called()
        mock_probe.duplicate_account.assert_called_once_with(
            domain_id=domain.id.value, account="alice"
        )

    @pytest.mark.asyncio
    async def test_failed_create_leaves_input_user_unchanged(
        self, user_service, mock_user_repository, domain, default_department
    ):
        """A conflict raised by the store does not attach a department."""
        mock_user_repository.create = AsyncMock(
            side_effect=ConflictError("account bob already exists")
        )
        user = User.create(account="bob", domain_id=domain.id)

        with pytest.raises(ConflictError):
            await user_service.create_member_user(user)

        persisted = mock_user_repository.create.await_args.args[0]
        assert persisted.department_id == default_department.id
        assert user.department_id is None
        assert user.department is None

    @pytest.mark.asyncio
    async def test_lookup_failure_is_reraised_unchanged(
        self, user_service, mock_user_repository, domain
    ):
        """A failing uniqueness lookup surfaces the store error itself."""
        error = RuntimeError("connection reset")
        mock_user_repository.get_by_account = AsyncMock(side_effect=error)
        user = User.create(account="alice", domain_id=domain.id)

        with pytest.raises(RuntimeError) as exc_info:
            await user_service.create_member_user(user)

        assert exc_info.value is error
        mock_user_repository.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_role_cascade_failure_keeps_earlier_steps(
        self,
        user_service,
        mock_user_repository,
        mock_role_repository,
        mock_probe,
        domain,
        general,
        viewer,
    ):
        """A failing bind propagates; the user and earlier bindings remain."""
        editor = Role.create(name="editor")
        mock_role_repository.list_department_roles = AsyncMock(
            return_value=[viewer, editor]
        )
        mock_user_repository.bind_role = AsyncMock(
            side_effect=[None, RuntimeError("bind failed")]
        )
        user = User.create(account="alice", domain_id=domain.id, department_id=general.id)

        with pytest.raises(RuntimeError, match="bind failed"):
            await user_service.create_member_user(user)

        mock_user_repository.create.assert_awaited_once()
        assert mock_user_repository.bind_role.await_count == 2
        mock_probe.role_cascade_failed.assert_called_once_with(
            user_id=user.id.value,
            role_id=editor.id.value,
            bound_count=1,
            error="bind failed",
        )

    @pytest.mark.asyncio
    async def test_dangling_domain_is_inconsistent(
        self, user_service, mock_domain_repository, domain, general
    ):
        """A persisted user whose domain cannot be read is not returned."""
        mock_domain_repository.get_by_id = AsyncMock(return_value=None)
        user = User.create(account="alice", domain_id=domain.id, department_id=general.id)

        with pytest.raises(InconsistentAggregateError):
            await user_service.create_member_user(user)


class TestGetUser:
    """Tests for get_user read-through caching."""

    @pytest.mark.asyncio
    async def test_returns_hydrated_aggregate(
        self, user_service, mock_user_repository, stored_alice, domain, general, p1
    ):
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)

        result = await user_service.get_user(domain.id, stored_alice.id)

        assert result.domain == domain
        assert result.department == general
        assert result.role_names == ["viewer"]
        assert [p.id for p in result.projects] == [p1.id]

    @pytest.mark.asyncio
    async def test_second_read_is_served_from_cache(
        self, user_service, mock_user_repository, mock_probe, stored_alice, domain
    ):
        """Only the first read reaches the stores."""
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)

        first = await user_service.get_user(domain.id, stored_alice.id)
        second = await user_service.get_user(domain.id, stored_alice.id)

        mock_user_repository.get_by_id.assert_awaited_once_with(stored_alice.id)
        assert second == first
        assert second.role_names == ["viewer"]
        assert second.department.name == "general"
        mock_probe.user_retrieved.assert_called_with(
            user_id=stored_alice.id.value, from_cache=True
        )

    @pytest.mark.asyncio
    async def test_disabled_cache_always_reads_stores(
        self,
        mock_user_repository,
        mock_domain_repository,
        mock_department_repository,
        mock_role_repository,
        mock_project_repository,
        cache,
        stored_alice,
        domain,
    ):
        service = UserService(
            user_repository=mock_user_repository,
            domain_repository=mock_domain_repository,
            department_repository=mock_department_repository,
            role_repository=mock_role_repository,
            project_repository=mock_project_repository,
            aggregate_cache=AggregateCache(cache, CachePolicy(enabled=False)),
        )
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)

        await service.get_user(domain.id, stored_alice.id)
        await service.get_user(domain.id, stored_alice.id)

        assert mock_user_repository.get_by_id.await_count == 2
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_missing_user_is_bad_request(
        self, user_service, mock_user_repository, domain
    ):
        mock_user_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(BadRequestError, match="not found"):
            await user_service.get_user(domain.id, UserId.generate())

    @pytest.mark.asyncio
    async def test_user_of_another_domain_is_not_visible(
        self, user_service, mock_user_repository, stored_alice
    ):
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)

        with pytest.raises(BadRequestError):
            await user_service.get_user(DomainId.generate(), stored_alice.id)

    @pytest.mark.asyncio
    async def test_cached_user_of_another_domain_is_not_visible(
        self, user_service, mock_user_repository, stored_alice, domain
    ):
        """Tenant scoping also applies to cache hits."""
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)
        await user_service.get_user(domain.id, stored_alice.id)

        with pytest.raises(BadRequestError):
            await user_service.get_user(DomainId.generate(), stored_alice.id)

    @pytest.mark.asyncio
    async def test_dangling_department_is_inconsistent(
        self, user_service, mock_user_repository, mock_department_repository, domain
    ):
        orphan = User(
            id=UserId.generate(),
            domain_id=domain.id,
            account="orphan",
            department_id=Department.create(domain_id=domain.id, name="gone").id,
        )
        mock_user_repository.get_by_id = AsyncMock(return_value=orphan)

        with pytest.raises(InconsistentAggregateError):
            await user_service.get_user(domain.id, orphan.id)


class TestDeleteUser:
    """Tests for delete_user."""

    @pytest.mark.asyncio
    async def test_delete_evicts_cached_aggregate(
        self, user_service, mock_user_repository, stored_alice, domain
    ):
        """A read after deletion never returns the cached aggregate."""
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)
        mock_user_repository.delete = AsyncMock(return_value=True)
        await user_service.get_user(domain.id, stored_alice.id)

        await user_service.delete_user(domain.id, stored_alice.id)
        mock_user_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(BadRequestError):
            await user_service.get_user(domain.id, stored_alice.id)
        mock_user_repository.get_by_id.assert_awaited_once_with(stored_alice.id)

    @pytest.mark.asyncio
    async def test_missing_user_is_not_found_and_keeps_cache(
        self, user_service, mock_user_repository, stored_alice, domain
    ):
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)
        mock_user_repository.delete = AsyncMock(return_value=False)
        await user_service.get_user(domain.id, stored_alice.id)

        with pytest.raises(NotFoundError):
            await user_service.delete_user(domain.id, stored_alice.id)

        await user_service.get_user(domain.id, stored_alice.id)
        mock_user_repository.get_by_id.assert_awaited_once()


class TestRoleBinding:
    """Tests for bind_role and unbind_role."""

    @pytest.mark.asyncio
    async def test_bind_evicts_then_persists(
        self, user_service, mock_user_repository, stored_alice, domain, viewer
    ):
        """The next read after a bind reassembles the aggregate."""
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)
        await user_service.get_user(domain.id, stored_alice.id)

        await user_service.bind_role(domain.id, stored_alice.id, "viewer")
        await user_service.get_user(domain.id, stored_alice.id)

        mock_user_repository.bind_role.assert_awaited_once_with(
            domain.id, stored_alice.id, viewer.id
        )
        # first read, user check in bind_role, read after eviction
        assert mock_user_repository.get_by_id.await_count == 3

    @pytest.mark.asyncio
    async def test_unknown_role_changes_nothing(
        self,
        user_service,
        mock_user_repository,
        mock_role_repository,
        mock_probe,
        stored_alice,
        domain,
    ):
        """A nonexistent role is rejected before the cache or store is touched."""
        mock_role_repository.get_by_name = AsyncMock(return_value=None)
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)
        await user_service.get_user(domain.id, stored_alice.id)

        with pytest.raises(BadRequestError, match="role admin not exist"):
            await user_service.bind_role(domain.id, stored_alice.id, "admin")

        mock_user_repository.bind_role.assert_not_called()
        mock_probe.role_not_found.assert_called_once_with(role_name="admin")
        await user_service.get_user(domain.id, stored_alice.id)
        mock_user_repository.get_by_id.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unbind_unknown_role_changes_nothing(
        self,
        user_service,
        mock_user_repository,
        mock_role_repository,
        stored_alice,
        domain,
    ):
        mock_role_repository.get_by_name = AsyncMock(return_value=None)
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)
        await user_service.get_user(domain.id, stored_alice.id)

        with pytest.raises(BadRequestError, match="role admin not exist"):
            await user_service.unbind_role(domain.id, stored_alice.id, "admin")

        mock_user_repository.unbind_role.assert_not_called()
        await user_service.get_user(domain.id, stored_alice.id)
        mock_user_repository.get_by_id.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_bind_for_missing_user_is_bad_request(
        self, user_service, mock_user_repository, mock_probe, domain
    ):
        """Binding never silently succeeds for a user that does not exist."""
        ghost = UserId.generate()
        mock_user_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(BadRequestError, match="not found"):
            await user_service.bind_role(domain.id, ghost, "viewer")

        mock_user_repository.bind_role.assert_not_called()
        mock_probe.role_bound.assert_not_called()
        mock_probe.user_not_found.assert_called_once_with(user_id=ghost.value)

    @pytest.mark.asyncio
    async def test_bind_for_user_of_another_domain_is_bad_request(
        self, user_service, mock_user_repository, stored_alice
    ):
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)

        with pytest.raises(BadRequestError, match="not found"):
            await user_service.bind_role(DomainId.generate(), stored_alice.id, "viewer")

        mock_user_repository.bind_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_unbind_for_missing_user_is_bad_request(
        self, user_service, mock_user_repository, domain
    ):
        mock_user_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(BadRequestError, match="not found"):
            await user_service.unbind_role(domain.id, UserId.generate(), "viewer")

        mock_user_repository.unbind_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_unbind_twice_succeeds(
        self, user_service, mock_user_repository, stored_alice, domain, viewer
    ):
        """Unbinding a role that is no longer held is a no-op."""
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)
        await user_service.unbind_role(domain.id, stored_alice.id, "viewer")
        await user_service.unbind_role(domain.id, stored_alice.id, "viewer")

        assert mock_user_repository.unbind_role.await_count == 2
        mock_user_repository.unbind_role.assert_awaited_with(
            domain.id, stored_alice.id, viewer.id
        )


class TestListMemberUsers:
    """Tests for list_member_users."""

    @pytest.mark.asyncio
    async def test_hydrates_each_user(
        self, user_service, mock_user_repository, mock_role_repository, domain, general
    ):
        users = [
            User(id=UserId.generate(), domain_id=domain.id, account=name, department_id=general.id)
            for name in ("alice", "bob")
        ]
        mock_user_repository.list_by_domain = AsyncMock(return_value=users)

        result = await user_service.list_member_users(domain.id)

        assert [u.account for u in result] == ["alice", "bob"]
        assert all(u.department == general for u in result)
        assert mock_role_repository.list_user_roles.await_count == 2

    @pytest.mark.asyncio
    async def test_one_dangling_member_fails_the_whole_list(
        self, user_service, mock_user_repository, mock_role_repository, domain, general
    ):
        """The second user's department is gone: nothing is returned."""
        alice = User(
            id=UserId.generate(), domain_id=domain.id, account="alice", department_id=general.id
        )
        bob = User(
            id=UserId.generate(),
            domain_id=domain.id,
            account="bob",
            department_id=Department.create(domain_id=domain.id, name="gone").id,
        )
        mock_user_repository.list_by_domain = AsyncMock(return_value=[alice, bob])

        with pytest.raises(InconsistentAggregateError):
            await user_service.list_member_users(domain.id)

        assert mock_role_repository.list_user_roles.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_domain_returns_empty_list(
        self, user_service, mock_user_repository, domain
    ):
        mock_user_repository.list_by_domain = AsyncMock(return_value=[])

        assert await user_service.list_member_users(domain.id) == []


class TestSetDefaultProject:
    """Tests for set_default_project."""

    @pytest.mark.asyncio
    async def test_sets_project_the_user_belongs_to(
        self, user_service, mock_user_repository, stored_alice, domain, p1
    ):
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)
        mock_user_repository.set_default_project = AsyncMock()

        await user_service.set_default_project(domain.id, stored_alice.id, p1.id)

        mock_user_repository.set_default_project.assert_awaited_once_with(
            stored_alice.id, p1.id
        )

    @pytest.mark.asyncio
    async def test_rejects_project_without_membership(
        self,
        user_service,
        mock_user_repository,
        mock_project_repository,
        stored_alice,
        domain,
        p1,
    ):
        mock_user_repository.get_by_id = AsyncMock(return_value=stored_alice)
        mock_user_repository.set_default_project = AsyncMock()
        mock_project_repository.list_user_projects = AsyncMock(return_value=[])

        with pytest.raises(BadRequestError, match="not a member"):
            await user_service.set_default_project(domain.id, stored_alice.id, p1.id)

        mock_user_repository.set_default_project.assert_not_called()
