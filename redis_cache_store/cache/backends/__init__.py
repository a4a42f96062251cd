"""
Redis Cache Store — Store Backends

Exports available store backend implementations.
"""

from .redis import RedisStore, redis_store

__all__ = [
    "RedisStore",
    "redis_store",
]
