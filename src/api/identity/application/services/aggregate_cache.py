"""Read-through cache for identity aggregates.

Cached entries are derived data. Reads that miss, or that hit an entry which
no longer decodes into a valid aggregate, fall through to persistence.
Writes and evictions are best effort: a failure is reported through the
probe and never changes the outcome of the calling use case.
"""

from __future__ import annotations

from pydantic import TypeAdapter, ValidationError

from identity.application.observability import (
    AggregateCacheProbe,
    DefaultAggregateCacheProbe,
)
from identity.application.value_objects import CachePolicy
from identity.domain.aggregates import Project, User
from identity.domain.value_objects import ProjectId, UserId
from shared_kernel.caching import CacheProvider

_USER_ADAPTER = TypeAdapter(User)
_PROJECT_ADAPTER = TypeAdapter(Project)


class AggregateCache:
    """Key management and (de)serialization for cached aggregates."""

    def __init__(
        self,
        cache: CacheProvider,
        policy: CachePolicy | None = None,
        probe: AggregateCacheProbe | None = None,
    ):
        self._cache = cache
        self._policy = policy or CachePolicy()
        self._probe = probe or DefaultAggregateCacheProbe()

    @property
    def enabled(self) -> bool:
        return self._policy.enabled

    def user_key(self, user_id: UserId) -> str:
        return f"{self._policy.user_key_prefix}{user_id.value}"

    def project_key(self, project_id: ProjectId) -> str:
        return f"{self._policy.project_key_prefix}{project_id.value}"

    async def get_user(self, user_id: UserId) -> User | None:
        """Return the cached user aggregate, or None to read through."""
        if not self.enabled:
            return None

        key = self.user_key(user_id)
        raw = await self._cache.get(key)
        if raw is None:
            self._probe.cache_miss(kind="user", key=key)
            return None

        try:
            user = _USER_ADAPTER.validate_json(raw)
        except ValidationError as e:
            self._probe.cache_entry_invalid(kind="user", key=key, error=str(e))
            return None

        if user.id != user_id or not user.is_hydrated:
            self._probe.cache_entry_invalid(
                kind="user", key=key, error="entry is not a hydrated aggregate"
            )
            return None

        self._probe.cache_hit(kind="user", key=key)
        return user

    async def put_user(self, user: User) -> None:
        if not self.enabled:
            return

        key = self.user_key(user.id)
        await self._put(kind="user", key=key, value=_USER_ADAPTER.dump_json(user))

    async def evict_user(self, user_id: UserId) -> None:
        await self._evict(kind="user", key=self.user_key(user_id))

    async def evict_users(self, user_ids: list[UserId]) -> None:
        for user_id in user_ids:
            await self.evict_user(user_id)

    async def get_project(self, project_id: ProjectId) -> Project | None:
        """Return the cached project, or None to read through."""
        if not self.enabled:
            return None

        key = self.project_key(project_id)
        raw = await self._cache.get(key)
        if raw is None:
            self._probe.cache_miss(kind="project", key=key)
            return None

        try:
            project = _PROJECT_ADAPTER.validate_json(raw)
        except ValidationError as e:
            self._probe.cache_entry_invalid(kind="project", key=key, error=str(e))
            return None

        if project.id != project_id:
            self._probe.cache_entry_invalid(
                kind="project", key=key, error="entry does not match key"
            )
            return None

        self._probe.cache_hit(kind="project", key=key)
        return project

    async def put_project(self, project: Project) -> None:
        if not self.enabled:
            return

        key = self.project_key(project.id)
        await self._put(
            kind="project", key=key, value=_PROJECT_ADAPTER.dump_json(project)
        )

    async def evict_project(self, project_id: ProjectId) -> None:
        await self._evict(kind="project", key=self.project_key(project_id))

    async def _put(self, kind: str, key: str, value: bytes) -> None:
        stored = await self._cache.set(
            key, value.decode("utf-8"), self._policy.ttl_seconds
        )
        if stored:
            self._probe.cache_populated(
                kind=kind, key=key, ttl_seconds=self._policy.ttl_seconds
            )
        else:
            self._probe.cache_write_failed(kind=kind, key=key)

    async def _evict(self, kind: str, key: str) -> None:
        # Runs regardless of policy.enabled.
        if await self._cache.delete(key):
            self._probe.cache_evicted(kind=kind, key=key)
        else:
            self._probe.cache_eviction_failed(kind=kind, key=key)
