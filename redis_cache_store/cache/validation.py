"""
Redis Cache Store — Cacheability Policy

Default rule for which values may be written. A store constructed with its
own predicate uses that predicate instead; the two are never combined.
"""

from typing import Any

from ..errors import NotCacheableError
from .types import UNDEFINED, CacheablePredicate


def default_is_cacheable_value(value: Any) -> bool:
    """Reject None and UNDEFINED, accept everything else."""
    return value is not None and value is not UNDEFINED


def ensure_cacheable(predicate: CacheablePredicate, value: Any, key: str | None = None) -> None:
    """
    Apply a cacheability predicate to one value.

    Raises:
        NotCacheableError: If the predicate rejects the value
    """
    if not predicate(value):
        raise NotCacheableError(value, key=key)
