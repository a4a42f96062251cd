"""
Redis Cache Store — Store Interface

Defines the abstract store contract a caching façade delegates to:
set/get/mset/mget/delete/reset/keys/ttl, the cacheability predicate and wrap.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from .ttl import TtlArgument
from .types import CacheResult, Producer
from .wrap import wrap as wrap_helper


class CacheStore(ABC):
    """
    Abstract base class for cache stores.

    Every operation either completes with its documented result or raises a
    RedisStoreError subclass. Nothing is swallowed.
    """

    @abstractmethod
    def is_cacheable_value(self, value: Any) -> bool:
        """Return True if the active policy permits writing value."""

    @abstractmethod
    async def lookup(self, key: str) -> CacheResult:
        """
        Read a key as a tagged result.

        Args:
            key: Cache key

        Returns:
            CacheResult distinguishing hit, undefined-sentinel hit and miss
        """

    async def get(self, key: str) -> Any | None:
        """
        Retrieve a value from the store.

        Args:
            key: Cache key

        Returns:
            Stored value, UNDEFINED for the sentinel, None on miss
        """
        return (await self.lookup(key)).value

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: TtlArgument = None) -> None:
        """
        Store a value.

        Args:
            key: Cache key
            value: Value to cache (must pass is_cacheable_value)
            ttl: Seconds, TtlOptions or {"ttl": n} (None = default, 0 = no expiry)

        Raises:
            NotCacheableError: If the policy rejects the value
            CacheConnectionError: If the store cannot be reached
        """

    @abstractmethod
    async def mset(
        self,
        pairs: Iterable[tuple[str, Any]] | Mapping[str, Any],
        ttl: TtlArgument = None,
    ) -> None:
        """
        Store several values with one TTL.

        Any rejected value fails the whole batch before anything is written.
        """

    @abstractmethod
    async def mget_results(self, *keys: str) -> list[CacheResult]:
        """Read several keys as tagged results, in input order."""

    async def mget(self, *keys: str) -> list[Any | None]:
        """
        Retrieve several values.

        Returns:
            List with the same order and length as keys; None where missing
        """
        return [result.value for result in await self.mget_results(*keys)]

    @abstractmethod
    async def delete(self, *keys: str | Iterable[str]) -> None:
        """
        Delete one or many keys.

        Accepts keys and lists of keys. Missing keys are not an error.
        """

    async def mdel(self, *keys: str) -> None:
        """Delete several keys."""
        await self.delete(*keys)

    @abstractmethod
    async def reset(self) -> None:
        """Remove every entry the store owns."""

    @abstractmethod
    async def keys(self, pattern: str = "*") -> list[str]:
        """
        List keys matching a glob-style pattern.

        Order is not guaranteed.
        """

    @abstractmethod
    async def ttl(self, key: str) -> int:
        """
        Report remaining time-to-live.

        Returns:
            Seconds remaining, -1 if the key never expires, -2 if it does not exist
        """

    @abstractmethod
    async def close(self) -> None:
        """
        Close the store and release its connection.

        Operations issued afterwards fail with CacheConnectionError.
        """

    async def wrap(self, key: str, producer: Producer, ttl: TtlArgument = None) -> Any:
        """
        Return the cached value for key, computing and storing it on a miss.

        See redis_cache_store.cache.wrap.wrap.
        """
        return await wrap_helper(self, key, producer, ttl)
