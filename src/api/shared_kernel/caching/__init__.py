"""Key-value caching primitives shared across bounded contexts.

Provides the ``CacheProvider`` protocol plus an in-process TTL cache and a
Redis-backed implementation. Callers treat every cache as advisory: a miss or
a failed write never changes the outcome of a use case.
"""

from shared_kernel.caching.memory import InMemoryCache
from shared_kernel.caching.protocols import CacheProvider

__all__ = [
    "CacheProvider",
    "InMemoryCache",
]
