"""
Redis Cache Store — TTL Normalization

Resolves the TTL accepted by write operations into Redis expiry arguments.

Priority:
1. explicit numeric TTL
2. ``ttl`` field of a TtlOptions instance or mapping
3. the store's default TTL
4. nothing: no expiry directive

A TTL of 0 always means "never expires". It resolves to a plain SET, which
also clears any expiry the key had before, never to ``EX 0``.
"""

from collections.abc import Mapping
from numbers import Real
from typing import Any

from ..errors import InvalidTTLError
from .types import TtlOptions

TtlArgument = int | TtlOptions | Mapping[str, Any] | None


def _extract(ttl: TtlArgument) -> Any:
    if isinstance(ttl, TtlOptions):
        return ttl.ttl
    if isinstance(ttl, Mapping):
        return ttl.get("ttl")
    return ttl


def _coerce(ttl: Any) -> int:
    # bool is an int subclass but never a meaningful TTL
    if isinstance(ttl, bool) or not isinstance(ttl, Real):
        raise InvalidTTLError(ttl)
    if ttl < 0 or int(ttl) != ttl:
        raise InvalidTTLError(ttl)
    return int(ttl)


def normalize_ttl(ttl: TtlArgument, default_ttl: int | None = None) -> int | None:
    """
    Resolve a TTL argument to seconds.

    Args:
        ttl: Explicit seconds, TtlOptions, a mapping with a "ttl" key, or None
        default_ttl: Store-wide default used when ttl is unspecified

    Returns:
        Positive number of seconds, or None when the entry must not expire

    Raises:
        InvalidTTLError: If the resolved TTL is negative, fractional or not a number
    """
    seconds = _extract(ttl)
    if seconds is None:
        seconds = default_ttl
    if seconds is None:
        return None

    seconds = _coerce(seconds)
    return seconds if seconds > 0 else None


def expiry_arguments(seconds: int | None) -> dict[str, int]:
    """Keyword arguments for ``Redis.set`` that apply the resolved expiry."""
    if seconds is None:
        return {}
    return {"ex": seconds}
