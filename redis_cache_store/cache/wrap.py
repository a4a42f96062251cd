"""
Redis Cache Store — Compute-or-Fetch Helper

wrap() looks a key up and, on a miss, runs a producer, caches its result and
returns it. Caching is best-effort: a failed or unserializable write is logged
and the producer's result is still returned.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

from ..errors import CacheConnectionError, SerializationError
from .ttl import TtlArgument
from .types import Producer

if TYPE_CHECKING:
    from .interface import CacheStore

logger = logging.getLogger(__name__)


async def wrap(store: CacheStore, key: str, producer: Producer, ttl: TtlArgument = None) -> Any:
    """
    Fetch key from store, or compute it with producer and cache the result.

    Args:
        store: Store to read from and write to
        key: Cache key
        producer: Zero-argument callable, sync or async
        ttl: TTL for the stored result (same forms as CacheStore.set)

    Returns:
        Cached value on a hit, otherwise the producer's result

    Raises:
        CacheConnectionError: If the initial lookup fails
        Exception: Whatever the producer raises
    """
    cached = await store.lookup(key)
    if cached.found:
        logger.debug("wrap hit for key '%s'", key, extra={"key": key})
        return cached.value

    result = producer()
    if inspect.isawaitable(result):
        result = await result

    if not store.is_cacheable_value(result):
        logger.debug(
            "wrap result for key '%s' is not cacheable, returning without storing",
            key,
            extra={"key": key, "value_type": type(result).__name__},
        )
        return result

    try:
        await store.set(key, result, ttl)
    except (CacheConnectionError, SerializationError) as e:
        logger.warning(
            f"Failed to cache wrap result for key '{key}': {e}",
            extra={"key": key, "error": str(e)},
        )

    return result
