"""
Redis Cache Store — Error Types

Defines the exception hierarchy raised by the store adapter.
All exceptions inherit from RedisStoreError for consistent error handling.

Taxonomy:
- NotCacheableError: the validation policy rejected a value (raised before any command)
- CacheConnectionError: any client/transport failure (refused, timeout, command error)
- SerializationError: a value could not be encoded or a stored payload decoded
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standard error codes carried in serialized error payloads."""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_TTL = "INVALID_TTL"
    NOT_CACHEABLE = "NOT_CACHEABLE"
    CACHE_FAILURE = "CACHE_FAILURE"
    CONNECTION_FAILURE = "CONNECTION_FAILURE"
    SERIALIZATION_FAILURE = "SERIALIZATION_FAILURE"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class RedisStoreError(Exception):
    """Base exception for all store adapter errors."""

    code: ErrorCode = ErrorCode.CACHE_FAILURE

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging or API responses."""
        return {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(RedisStoreError):
    """Raised when configuration is invalid or missing."""

    code = ErrorCode.CONFIGURATION_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=500)


class ValidationError(RedisStoreError):
    """Raised when an operation argument is invalid."""

    code = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=400)


class InvalidTTLError(ValidationError):
    """Raised when a TTL is negative, fractional or of the wrong type."""

    code = ErrorCode.INVALID_TTL

    def __init__(self, ttl: Any):
        super().__init__(
            f"Invalid TTL {ttl!r}: expected a non-negative integer number of seconds",
            {"ttl": repr(ttl), "ttl_type": type(ttl).__name__},
        )
        self.ttl = ttl


class CacheError(RedisStoreError):
    """Base exception for cache-related errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=500)


class NotCacheableError(CacheError):
    """Raised when the cacheability policy rejects a value."""

    code = ErrorCode.NOT_CACHEABLE

    def __init__(self, value: Any, key: str | None = None):
        details: dict[str, Any] = {"value": repr(value)}
        if key is not None:
            details["key"] = key
        super().__init__(f'"{value}" is not a cacheable value', details)
        self.status_code = 422
        self.value = value


class CacheConnectionError(CacheError):
    """Raised when the store client cannot complete a command."""

    code = ErrorCode.CONNECTION_FAILURE

    def __init__(
        self,
        operation: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        if cause is not None:
            message = f"Redis operation '{operation}' failed: {cause}"
        else:
            message = f"Redis operation '{operation}' failed: store is not connected"
        error_details = dict(details or {})
        error_details["operation"] = operation
        if cause is not None:
            error_details["cause"] = type(cause).__name__
        super().__init__(message, error_details)
        self.status_code = 503
        self.operation = operation


class SerializationError(CacheError):
    """Raised when a value cannot be encoded or a payload cannot be decoded."""

    code = ErrorCode.SERIALIZATION_FAILURE


def is_retryable_error(error: Exception) -> bool:
    """
    Check if an error is transient and worth retrying by the caller.

    The store never retries on its own; this only classifies errors.

    Args:
        error: Exception to check

    Returns:
        True if the error came from the connection rather than the input
    """
    return isinstance(error, CacheConnectionError)
