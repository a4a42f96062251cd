"""
Redis Cache Store — Value Serializer

Converts values to and from the wire strings stored in Redis.

Encoding:
- UNDEFINED -> the bare token ``undefined``
- everything else -> compact JSON

The bare token is not a valid JSON document, and the JSON encoding of the
string "undefined" is ``"undefined"`` with quotes, so the two never collide.
"""

import json
import logging
from typing import Any

from ..errors import SerializationError
from .types import UNDEFINED, CacheResult

logger = logging.getLogger(__name__)

UNDEFINED_TOKEN = "undefined"


def encode(value: Any) -> str:
    """
    Serialize a value to its wire representation.

    Args:
        value: JSON-representable value or UNDEFINED

    Returns:
        Wire string

    Raises:
        SerializationError: If the value has no JSON representation
    """
    if value is UNDEFINED:
        return UNDEFINED_TOKEN
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        logger.error(
            f"Failed to serialize value of type {type(value).__name__}: {e}",
            extra={"value_type": type(value).__name__, "error": str(e)},
        )
        raise SerializationError(
            f"Value of type {type(value).__name__} is not JSON serializable: {e}",
            details={"value_type": type(value).__name__, "error": str(e)},
        ) from e


def decode(data: str | bytes | None) -> CacheResult:
    """
    Deserialize a wire string read from Redis.

    Args:
        data: Raw reply; None means the key had no entry

    Returns:
        CacheResult tagged as hit, undefined-sentinel hit or miss

    Raises:
        SerializationError: If the payload is not valid JSON
    """
    if data is None:
        return CacheResult.miss()

    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        if data == UNDEFINED_TOKEN:
            return CacheResult.undefined()
        return CacheResult.hit(json.loads(data))
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        preview = data[:100] if len(data) > 100 else data
        logger.error(
            f"Failed to decode cached payload: {e}",
            extra={"data_preview": preview, "error": str(e)},
        )
        raise SerializationError(
            f"Stored payload is not valid JSON: {e}",
            details={"data_preview": str(preview), "error": str(e)},
        ) from e
