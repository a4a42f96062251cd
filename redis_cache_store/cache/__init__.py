"""
Redis Cache Store — Cache Module

Provides the store contract, its Redis implementation and helpers.

Usage:
    from redis_cache_store.cache import redis_store

    store = await redis_store()
    await store.set("key", "value", ttl=3600)
    value = await store.get("key")
"""

from .backends.redis import RedisStore, redis_store
from .factory import (
    close_all_stores,
    create_store,
    get_store,
    list_store_instances,
    reset_store_factory,
)
from .interface import CacheStore
from .types import UNDEFINED, CacheResult, ResultKind, TtlOptions
from .validation import default_is_cacheable_value
from .wrap import wrap

__all__ = [
    # Factory functions
    "create_store",
    "get_store",
    "close_all_stores",
    "list_store_instances",
    "reset_store_factory",
    # Interface and backend
    "CacheStore",
    "RedisStore",
    "redis_store",
    # Types
    "UNDEFINED",
    "CacheResult",
    "ResultKind",
    "TtlOptions",
    # Helpers
    "default_is_cacheable_value",
    "wrap",
]
