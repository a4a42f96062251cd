"""
Redis Cache Store — Store Factory

Creates store instances from configuration and keeps them in a named registry
so a process can share one connection per logical cache.

Examples:
    from redis_cache_store.cache import create_store, get_store

    # Uses env-configured settings (REDIS_URL, CACHE_TTL_SECONDS, ...)
    store = create_store()

    # Or explicitly supply a StoreConfig (e.g., for tests)
    from redis_cache_store.config import StoreConfig
    cfg = StoreConfig(redis_url="redis://localhost:6379/15", ttl_seconds=600)
    test_store = create_store(cfg, name="test")
"""

from __future__ import annotations

import logging

from ..config import StoreConfig, get_config
from ..errors import ConfigurationError, RedisStoreError
from .backends.redis import RedisStore
from .interface import CacheStore
from .types import CacheablePredicate

logger = logging.getLogger(__name__)

# Global store instances registry
_store_instances: dict[str, CacheStore] = {}


def create_store(
    config: StoreConfig | None = None,
    name: str = "default",
    is_cacheable_value: CacheablePredicate | None = None,
) -> CacheStore:
    """
    Create a store instance based on configuration.

    The Redis client connects lazily, so creation never touches the network.

    Args:
        config: Store configuration (uses global config if not provided)
        name: Store instance name (for multiple store instances)
        is_cacheable_value: Predicate replacing the default cacheability policy

    Returns:
        Configured store instance

    Raises:
        ConfigurationError: If the store cannot be constructed
    """
    if name in _store_instances:
        logger.debug("Returning existing store instance: %s", name)
        return _store_instances[name]

    if config is None:
        config = get_config().store

    logger.info(
        "Creating store instance '%s'",
        name,
        extra={"store_name": name, "namespace": config.namespace},
    )

    try:
        store = RedisStore.from_config(config, is_cacheable_value=is_cacheable_value)
    except (RedisStoreError, ValueError) as e:
        logger.error(
            "Invalid settings for store instance '%s': %s",
            name,
            e,
            extra={"store_name": name, "error": str(e)},
        )
        raise ConfigurationError(
            f"Failed to create store instance '{name}': {e}",
            details={"store_name": name, "error": str(e)},
        ) from e

    _store_instances[name] = store
    logger.info("Store instance '%s' created successfully", name, extra={"store_name": name})
    return store


def get_store(name: str = "default") -> CacheStore:
    """
    Get an existing store instance by name.

    If the instance doesn't exist, it is created from the global configuration.
    """
    if name not in _store_instances:
        logger.debug("Store instance '%s' not found, creating new instance", name)
        return create_store(name=name)

    return _store_instances[name]


async def close_all_stores() -> None:
    """
    Close all store instances and release their connections.

    Every instance is attempted; the first failure is re-raised afterwards.
    """
    if not _store_instances:
        logger.debug("No store instances to close")
        return

    logger.info("Closing %d store instance(s)...", len(_store_instances))

    first_error: RedisStoreError | None = None
    for name, store in list(_store_instances.items()):
        try:
            await store.close()
            logger.info("Closed store instance: %s", name)
        except RedisStoreError as e:
            logger.error(
                "Error closing store instance '%s': %s",
                name,
                e,
                extra={"store_name": name, "error": str(e)},
            )
            first_error = first_error or e

    _store_instances.clear()
    if first_error is not None:
        raise first_error
    logger.info("All store instances closed")


def reset_store_factory() -> None:
    """
    Clear all instance references without closing them.

    Warning: Only use this in testing contexts.
    """
    count = len(_store_instances)
    _store_instances.clear()
    logger.debug("Reset store factory, cleared %d instance reference(s)", count)


def list_store_instances() -> list[str]:
    """List all registered store instance names."""
    return list(_store_instances.keys())
