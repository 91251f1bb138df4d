"""Aggregate cache dependencies for the identity context."""

from typing import Annotated

from fastapi import Depends

from identity.application.services import AggregateCache
from identity.application.value_objects import CachePolicy
from infrastructure.dependencies import get_cache_provider
from infrastructure.settings import get_cache_settings
from shared_kernel.caching import CacheProvider


def get_cache_policy() -> CachePolicy:
    """Build the caching policy from configuration.

    Returns:
        CachePolicy with the configured switch and TTL
    """
    settings = get_cache_settings()
    return CachePolicy(enabled=settings.enabled, ttl_seconds=settings.ttl_seconds)


def get_aggregate_cache(
    cache: Annotated[CacheProvider, Depends(get_cache_provider)],
    policy: Annotated[CachePolicy, Depends(get_cache_policy)],
) -> AggregateCache:
    """Get an AggregateCache over the application-scoped cache provider."""
    return AggregateCache(cache=cache, policy=policy)
