"""
Redis Cache Store

A Redis-backed cache store adapter exposing the uniform store contract
(set/get/mset/mget/delete/reset/keys/ttl/wrap) for caching façades.
"""

from .cache import (
    UNDEFINED,
    CacheResult,
    CacheStore,
    RedisStore,
    ResultKind,
    TtlOptions,
    close_all_stores,
    create_store,
    get_store,
    redis_store,
    wrap,
)
from .errors import (
    CacheConnectionError,
    CacheError,
    ConfigurationError,
    InvalidTTLError,
    NotCacheableError,
    RedisStoreError,
    SerializationError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    "UNDEFINED",
    "CacheResult",
    "CacheStore",
    "RedisStore",
    "ResultKind",
    "TtlOptions",
    "close_all_stores",
    "create_store",
    "get_store",
    "redis_store",
    "wrap",
    "CacheConnectionError",
    "CacheError",
    "ConfigurationError",
    "InvalidTTLError",
    "NotCacheableError",
    "RedisStoreError",
    "SerializationError",
    "ValidationError",
]
