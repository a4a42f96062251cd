"""
Redis Cache Store — Configuration Tests
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from pydantic import ValidationError

from redis_cache_store.config import (
    LogFormat,
    LogLevel,
    RedisStoreConfig,
    StoreConfig,
    get_config,
    load_config,
    reload_config,
)
from redis_cache_store.errors import ConfigurationError

ENV_VARS = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "REDIS_URL",
    "CACHE_TTL_SECONDS",
    "CACHE_NAMESPACE",
    "REDIS_MAX_CONNECTIONS",
    "REDIS_SOCKET_TIMEOUT",
    "REDIS_SOCKET_CONNECT_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Isolate every test from the caller's environment and any .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # Restore the environment, then replace whatever config the test loaded
    monkeypatch.undo()
    load_config(reload=True)


class TestStoreConfig:
    """Schema validation."""

    def test_defaults(self) -> None:
        config = StoreConfig()
        assert config.redis_url == "redis://localhost:6379/0"
        assert config.ttl_seconds is None
        assert config.namespace is None
        assert config.max_connections == 10

    @pytest.mark.parametrize("url", ["redis://localhost:6379/1", "rediss://cache:6380", "unix:///tmp/redis.sock"])
    def test_accepted_urls(self, url: str) -> None:
        assert StoreConfig(redis_url=url).redis_url == url

    def test_rejects_unknown_scheme(self) -> None:
        with pytest.raises(ValidationError):
            StoreConfig(redis_url="http://localhost:6379")

    def test_rejects_negative_ttl(self) -> None:
        with pytest.raises(ValidationError):
            StoreConfig(ttl_seconds=-1)

    def test_blank_namespace_becomes_none(self) -> None:
        assert StoreConfig(namespace="   ").namespace is None
        assert StoreConfig(namespace=" app ").namespace == "app"

    def test_root_uses_enum_values(self) -> None:
        config = RedisStoreConfig(log_level=LogLevel.DEBUG, log_format=LogFormat.TEXT)
        assert config.log_level == "DEBUG"
        assert config.log_format == "text"


class TestLoadConfig:
    """Environment and .env loading."""

    def test_load_defaults(self) -> None:
        config = load_config(reload=True)
        assert config.environment == "development"
        assert config.store == StoreConfig()

    def test_load_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "test")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("REDIS_URL", "redis://cache:6379/3")
        monkeypatch.setenv("CACHE_TTL_SECONDS", "0")
        monkeypatch.setenv("CACHE_NAMESPACE", "app")
        monkeypatch.setenv("REDIS_MAX_CONNECTIONS", "4")
        monkeypatch.setenv("REDIS_SOCKET_TIMEOUT", "2.5")

        config = load_config(reload=True)

        assert config.environment == "test"
        assert config.log_level == "DEBUG"
        assert config.store.redis_url == "redis://cache:6379/3"
        assert config.store.ttl_seconds == 0
        assert config.store.namespace == "app"
        assert config.store.max_connections == 4
        assert config.store.socket_timeout == 2.5

    def test_load_from_env_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        # setenv first so monkeypatch restores the values dotenv overwrites
        monkeypatch.setenv("CACHE_NAMESPACE", "from-env")
        monkeypatch.setenv("CACHE_TTL_SECONDS", "1")
        env_file = tmp_path / "custom.env"
        env_file.write_text("CACHE_NAMESPACE=from-file\nCACHE_TTL_SECONDS=600\n")

        config = load_config(env_file=str(env_file), reload=True)

        assert config.store.namespace == "from-file"
        assert config.store.ttl_seconds == 600

    def test_singleton(self) -> None:
        first = load_config(reload=True)
        assert load_config() is first
        assert get_config() is first

    def test_reload_picks_up_changes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        load_config(reload=True)
        monkeypatch.setenv("CACHE_NAMESPACE", "reloaded")
        assert reload_config().store.namespace == "reloaded"

    def test_invalid_url_raises_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_URL", "memcached://localhost")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(reload=True)
        assert "validation_errors" in exc_info.value.details

    def test_non_integer_ttl_raises_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_TTL_SECONDS", "soon")
        with pytest.raises(ConfigurationError, match="CACHE_TTL_SECONDS"):
            load_config(reload=True)

    def test_non_numeric_timeout_raises_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_SOCKET_TIMEOUT", "fast")
        with pytest.raises(ConfigurationError, match="REDIS_SOCKET_TIMEOUT"):
            load_config(reload=True)
