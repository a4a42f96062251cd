"""
Redis Cache Store — Value Types

Shared value types for the store contract:
- UNDEFINED: sentinel for "a value that has no JSON form", distinct from None
- CacheResult: tagged read result (hit, undefined-sentinel hit, miss)
- TtlOptions: structured per-call options carrying a TTL
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final


class _Undefined:
    """Singleton type of the UNDEFINED sentinel."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __str__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = _Undefined()


class ResultKind(str, Enum):
    """Outcome of a single-key read."""

    HIT = "hit"
    HIT_UNDEFINED = "hit_undefined"
    MISS = "miss"


@dataclass(frozen=True, slots=True)
class CacheResult:
    """
    Tagged result of reading one key.

    Keeps "stored None", "stored UNDEFINED" and "no entry" apart, which a
    plain Optional return cannot do.
    """

    kind: ResultKind
    value: Any = None

    @classmethod
    def hit(cls, value: Any) -> "CacheResult":
        return cls(ResultKind.HIT, value)

    @classmethod
    def undefined(cls) -> "CacheResult":
        return cls(ResultKind.HIT_UNDEFINED, UNDEFINED)

    @classmethod
    def miss(cls) -> "CacheResult":
        return cls(ResultKind.MISS, None)

    @property
    def found(self) -> bool:
        """True when the key had an entry, whatever its value."""
        return self.kind is not ResultKind.MISS


@dataclass(frozen=True, slots=True)
class TtlOptions:
    """Structured options accepted wherever a TTL is."""

    ttl: int | None = None


# Validation policy: returns True when the value may be written
CacheablePredicate = Callable[[Any], bool]

# Producer passed to wrap(); may be sync or async
Producer = Callable[[], Any | Awaitable[Any]]
