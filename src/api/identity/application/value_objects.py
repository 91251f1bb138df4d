"""Application-level value objects for the identity context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Awaitable, Generic, TypeVar

T = TypeVar("T")


class LookupStatus(StrEnum):
    """Outcome of a store lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Tagged result of a store lookup.

    Uniqueness checks branch on ``status`` instead of inspecting error types:
    NOT_FOUND is the expected outcome before creating a record, FOUND means
    the name is taken, FAILED carries the store error to re-raise unchanged.
    """

    status: LookupStatus
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def found(cls, value: T) -> Lookup[T]:
        return cls(status=LookupStatus.FOUND, value=value)

    @classmethod
    def not_found(cls) -> Lookup[T]:
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: Exception) -> Lookup[T]:
        return cls(status=LookupStatus.FAILED, error=error)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def raise_for_failure(self) -> None:
        """Re-raise the store error of a FAILED lookup, unchanged."""
        if self.status is LookupStatus.FAILED and self.error is not None:
            raise self.error


async def lookup(fetch: Awaitable[T | None]) -> Lookup[T]:
    """Await a ``get_*`` store call and tag its outcome.

    Args:
        fetch: Awaitable returning the record or None

    Returns:
        FOUND with the record, NOT_FOUND, or FAILED with the raised error
    """
    try:
        value = await fetch
    except Exception as e:
        return Lookup.failed(e)

    if value is None:
        return Lookup.not_found()
    return Lookup.found(value)


@dataclass(frozen=True)
class CachePolicy:
    """Caching configuration injected into the aggregate cache.

    Attributes:
        enabled: Serve aggregate reads through the cache
        ttl_seconds: Lifetime of cached aggregates
        user_key_prefix: Key prefix for user aggregates
        project_key_prefix: Key prefix for project records
    """

    enabled: bool = True
    ttl_seconds: int = 300
    user_key_prefix: str = "user_"
    project_key_prefix: str = "project_"

    def __post_init__(self) -> None:
        if self.ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
