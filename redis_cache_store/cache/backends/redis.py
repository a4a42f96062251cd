"""
Redis Cache Store — Redis Backend

Asynchronous store adapter over a single redis-py asyncio client with:
- JSON serialization for values, with a reserved token for UNDEFINED
- Per-key TTL applied atomically with the write (SET ... EX)
- Atomic batch writes (MSET, or MULTI/EXEC when a TTL is set)
- Optional namespace prefixing for stores that share a database
- Uniform CacheConnectionError for every client failure

Requires: redis>=5.0 with asyncio support

Example:
    store = await redis_store(StoreConfig(redis_url="redis://localhost:6379/0", ttl_seconds=600))
    await store.set("greeting", {"msg": "hello"}, ttl=60)
    val = await store.get("greeting")
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from redis.asyncio import Redis
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff
from redis.exceptions import RedisError

from ...config import StoreConfig, get_config
from ...errors import CacheConnectionError
from .. import serializer
from ..interface import CacheStore
from ..ttl import TtlArgument, expiry_arguments, normalize_ttl
from ..types import CacheablePredicate, CacheResult
from ..validation import default_is_cacheable_value, ensure_cacheable

logger = logging.getLogger(__name__)

# Failures raised by the client that surface as CacheConnectionError
CLIENT_ERRORS: tuple[type[BaseException], ...] = (RedisError, OSError, asyncio.TimeoutError)

DELETE_CHUNK_SIZE = 1000
SCAN_BATCH_SIZE = 1000


class RedisStore(CacheStore):
    """
    Redis store adapter.

    Notes:
    - Without a namespace the store owns the whole logical database: reset()
      issues FLUSHDB and keys() scans everything.
    - With a namespace, keys are stored as "<namespace>:<key>" and reset()
      only deletes that prefix.
    - The adapter holds no entries; its state is the client, the policy,
      the default TTL and the namespace.
    - No retries or reconnects. Once close() is called every operation fails.
    """

    def __init__(
        self,
        client: Redis,
        default_ttl: int | None = None,
        namespace: str | None = None,
        is_cacheable_value: CacheablePredicate | None = None,
    ) -> None:
        """
        Initialize the store around an existing client.

        Args:
            client: redis.asyncio.Redis instance (connection owned by the store from now on)
            default_ttl: TTL used when a write gives none (None => no expiry directive)
            namespace: Optional key prefix
            is_cacheable_value: Predicate replacing the default cacheability policy
        """
        if default_ttl is not None:
            # raises InvalidTTLError
            normalize_ttl(default_ttl)

        self._client = client
        self.default_ttl = default_ttl
        self.namespace = namespace.strip() if namespace and namespace.strip() else None
        self._is_cacheable_value = is_cacheable_value or default_is_cacheable_value
        self._closed = False

    @classmethod
    def from_config(
        cls,
        config: StoreConfig,
        is_cacheable_value: CacheablePredicate | None = None,
    ) -> RedisStore:
        """
        Build a store and its client from configuration.

        The client connects lazily on the first command and never retries,
        so failures reach the caller on the first attempt.
        """
        client = Redis.from_url(  # type: ignore[call-overload]
            url=config.redis_url,
            decode_responses=True,
            max_connections=config.max_connections,
            socket_timeout=config.socket_timeout,
            socket_connect_timeout=config.socket_connect_timeout,
            retry_on_timeout=False,
            retry=Retry(NoBackoff(), 0),
        )
        return cls(
            client,
            default_ttl=config.ttl_seconds,
            namespace=config.namespace,
            is_cacheable_value=is_cacheable_value,
        )

    # ------------ Helpers ------------

    @property
    def client(self) -> Redis:
        """
        The underlying redis.asyncio.Redis client.

        Use it for reads and advanced commands only. Closing it directly does not
        sever the store: redis-py reconnects on the next command. Call
        store.close() to disconnect.
        """
        return self._client

    @property
    def is_connected(self) -> bool:
        """False once the store has been closed."""
        return not self._closed

    def is_cacheable_value(self, value: Any) -> bool:
        return self._is_cacheable_value(value)

    def _make_key(self, key: str) -> str:
        """Create namespaced key."""
        if self.namespace is None:
            return key
        return f"{self.namespace}:{key}"

    def _make_pattern(self, pattern: str) -> str:
        """Create namespaced SCAN pattern with the namespace matched literally."""
        if self.namespace is None:
            return pattern
        escaped = re.sub(r"([\\*?\[\]])", r"\\\1", self.namespace)
        return f"{escaped}:{pattern}"

    def _strip_key(self, raw: str | bytes) -> str:
        key = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        if self.namespace is None:
            return key
        return key[len(self.namespace) + 1 :]

    @contextmanager
    def _command(self, operation: str, **extra: Any) -> Iterator[None]:
        """Run client calls, translating client failures into CacheConnectionError."""
        if self._closed:
            raise CacheConnectionError(operation, details=extra)
        try:
            yield
        except CLIENT_ERRORS as e:
            logger.error(
                f"Redis operation '{operation}' failed: {e}",
                extra={"operation": operation, "namespace": self.namespace, "error": str(e), **extra},
            )
            raise CacheConnectionError(operation, e, details=extra) from e

    @staticmethod
    def _flatten_keys(keys: tuple[str | Iterable[str], ...]) -> list[str]:
        flat: list[str] = []
        for item in keys:
            if isinstance(item, str | bytes):
                flat.append(item)  # type: ignore[arg-type]
            else:
                flat.extend(item)
        return flat

    # ------------ Single-key operations ------------

    async def lookup(self, key: str) -> CacheResult:
        """Read a key as a tagged result."""
        with self._command("get", key=key):
            data = await self._client.get(self._make_key(key))
        return serializer.decode(data)

    async def set(self, key: str, value: Any, ttl: TtlArgument = None) -> None:
        """Validate, encode and store a value with its expiry in one SET."""
        ensure_cacheable(self._is_cacheable_value, value, key=key)
        payload = serializer.encode(value)
        seconds = normalize_ttl(ttl, self.default_ttl)

        with self._command("set", key=key, ttl=seconds):
            await self._client.set(self._make_key(key), payload, **expiry_arguments(seconds))

    async def ttl(self, key: str) -> int:
        """Remaining TTL: seconds, -1 for no expiry, -2 for a missing key."""
        with self._command("ttl", key=key):
            return int(await self._client.ttl(self._make_key(key)))

    # ------------ Batch operations ------------

    async def mset(
        self,
        pairs: Iterable[tuple[str, Any]] | Mapping[str, Any],
        ttl: TtlArgument = None,
    ) -> None:
        """
        Store several values with one TTL.

        Every value is validated before any command is sent. Without expiry a
        single MSET is issued; with expiry the SETs run inside MULTI/EXEC.
        Both are atomic on one Redis node.
        """
        items = list(pairs.items()) if isinstance(pairs, Mapping) else list(pairs)
        for key, value in items:
            ensure_cacheable(self._is_cacheable_value, value, key=key)

        payloads = {self._make_key(key): serializer.encode(value) for key, value in items}
        seconds = normalize_ttl(ttl, self.default_ttl)
        if not payloads:
            return

        with self._command("mset", key_count=len(payloads), ttl=seconds):
            if seconds is None:
                await self._client.mset(payloads)
                return

            pipe = self._client.pipeline(transaction=True)
            for ns_key, payload in payloads.items():
                pipe.set(ns_key, payload, **expiry_arguments(seconds))
            await pipe.execute()

    async def mget_results(self, *keys: str) -> list[CacheResult]:
        """Read several keys in one MGET, preserving order and length."""
        if not keys:
            return []

        with self._command("mget", key_count=len(keys)):
            values = await self._client.mget([self._make_key(k) for k in keys])
        return [serializer.decode(raw) for raw in values]

    async def delete(self, *keys: str | Iterable[str]) -> None:
        """Delete keys with variadic DEL in chunks. Missing keys are ignored."""
        ns_keys = [self._make_key(k) for k in self._flatten_keys(keys)]
        if not ns_keys:
            return

        with self._command("del", key_count=len(ns_keys)):
            for i in range(0, len(ns_keys), DELETE_CHUNK_SIZE):
                await self._client.delete(*ns_keys[i : i + DELETE_CHUNK_SIZE])

    # ------------ Keyspace operations ------------

    async def _scan(self, match: str) -> list[str | bytes]:
        found: list[str | bytes] = []
        cursor = 0
        while True:
            cursor, batch = await self._client.scan(cursor=cursor, match=match, count=SCAN_BATCH_SIZE)
            found.extend(batch)
            if int(cursor) == 0:
                return found

    async def keys(self, pattern: str = "*") -> list[str]:
        """List keys matching a glob-style pattern. Order is not guaranteed."""
        with self._command("keys", pattern=pattern):
            raw_keys = await self._scan(self._make_pattern(pattern))
        return list(dict.fromkeys(self._strip_key(raw) for raw in raw_keys))

    async def reset(self) -> None:
        """
        Remove every entry the store owns.

        Implementation: FLUSHDB without a namespace, otherwise SCAN
        "<namespace>:*" and DEL in batches.
        """
        with self._command("reset"):
            if self.namespace is None:
                await self._client.flushdb()
                logger.info("Flushed Redis database")
                return

            pattern = self._make_pattern("*")
            cursor = 0
            total_deleted = 0
            while True:
                cursor, batch = await self._client.scan(cursor=cursor, match=pattern, count=SCAN_BATCH_SIZE)
                if batch:
                    total_deleted += int(await self._client.delete(*batch))
                if int(cursor) == 0:
                    break

        logger.info(
            f"Cleared {total_deleted} keys from namespace '{self.namespace}'",
            extra={"namespace": self.namespace, "deleted": total_deleted},
        )

    # ------------ Lifecycle ------------

    async def close(self) -> None:
        """Close the client and release its pool. Later operations fail."""
        if self._closed:
            return
        self._closed = True
        try:
            await self._client.aclose()
        except CLIENT_ERRORS as e:
            logger.error(
                f"Error closing Redis client: {e}",
                extra={"namespace": self.namespace, "error": str(e)},
            )
            raise CacheConnectionError("close", e) from e
        logger.info("Closed Redis store", extra={"namespace": self.namespace})


async def redis_store(
    config: StoreConfig | None = None,
    is_cacheable_value: CacheablePredicate | None = None,
    **overrides: Any,
) -> RedisStore:
    """
    Create a RedisStore and verify the connection with PING.

    Args:
        config: Store configuration (uses global config if not provided)
        is_cacheable_value: Predicate replacing the default cacheability policy
        **overrides: StoreConfig fields to override, e.g. ttl_seconds=0

    Returns:
        Connected RedisStore

    Raises:
        CacheConnectionError: If Redis does not answer
    """
    if config is None:
        config = get_config().store
    if overrides:
        config = StoreConfig(**{**config.model_dump(), **overrides})

    store = RedisStore.from_config(config, is_cacheable_value=is_cacheable_value)
    try:
        with store._command("ping"):
            await store.client.ping()
    except CacheConnectionError:
        await store.client.aclose()
        raise

    logger.info(
        "Connected Redis store",
        extra={"namespace": store.namespace, "default_ttl": store.default_ttl},
    )
    return store
