"""
Redis Cache Store — Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.
All configuration is defined here and validated when loaded.
"""

from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUPPORTED_URL_SCHEMES = ("redis", "rediss", "unix")


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    TEXT = "text"


class StoreConfig(BaseModel):
    """Redis store configuration."""

    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    ttl_seconds: int | None = Field(
        default=None,
        ge=0,
        description="Default TTL in seconds (None = no expiry directive, 0 = never expires)",
    )
    namespace: str | None = Field(
        default=None,
        description="Key prefix; when unset the store owns the whole database",
    )
    max_connections: int = Field(default=10, ge=1, description="Redis connection pool size")
    socket_timeout: float = Field(default=5.0, gt=0, description="Redis socket timeout in seconds")
    socket_connect_timeout: float = Field(default=5.0, gt=0, description="Redis connect timeout in seconds")

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str) -> str:
        """Ensure the URL uses a scheme redis-py understands."""
        scheme = urlparse(v).scheme
        if scheme not in SUPPORTED_URL_SCHEMES:
            raise ValueError(f"redis_url scheme must be one of {', '.join(SUPPORTED_URL_SCHEMES)}, got '{scheme}'")
        return v

    @field_validator("namespace")
    @classmethod
    def normalize_namespace(cls, v: str | None) -> str | None:
        """Treat a blank namespace as no namespace."""
        if v is None:
            return None
        v = v.strip()
        return v or None


class RedisStoreConfig(BaseModel):
    """Root configuration."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Log output format")

    store: StoreConfig = Field(default_factory=StoreConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
