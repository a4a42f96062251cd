"""
Redis Cache Store — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
import socket
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from redis.asyncio import Redis

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

# Client coroutine methods the store calls
CLIENT_COMMANDS = ("get", "set", "mset", "mget", "delete", "scan", "flushdb", "ttl", "ping", "aclose")


def is_redis_available() -> bool:
    """Check if Redis server is available for testing."""
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        result = sock.connect_ex(("localhost", 6379))
        sock.close()
        return result == 0
    except OSError:
        return False


# Skip marker for Redis tests
redis_available = pytest.mark.skipif(not is_redis_available(), reason="Redis server not available")


def make_mock_client() -> MagicMock:
    """Build a stand-in for redis.asyncio.Redis with awaitable commands."""
    client = MagicMock(name="redis_client")
    for command in CLIENT_COMMANDS:
        setattr(client, command, AsyncMock(name=command))

    client.get.return_value = None
    client.mget.return_value = []
    client.ttl.return_value = -2
    client.scan.return_value = (0, [])
    client.delete.return_value = 0

    pipe = MagicMock(name="pipeline")
    pipe.execute = AsyncMock(name="execute", return_value=[])
    client.pipeline.return_value = pipe
    return client


@pytest.fixture
def mock_client() -> MagicMock:
    """A fresh mocked Redis client for each test."""
    return make_mock_client()


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest_asyncio.fixture
async def redis_client(test_redis_url: str) -> AsyncGenerator[Redis, None]:
    """
    Create a raw Redis client for testing.

    Automatically skips tests if Redis is not available.
    Clears the test database before and after each test.
    """
    client: Redis = Redis.from_url(test_redis_url, decode_responses=True)

    try:
        await client.ping()
    except Exception as e:
        await client.aclose()
        pytest.skip(f"Redis not available for testing: {e}")

    await client.flushdb()

    yield client

    try:
        await client.flushdb()
    finally:
        await client.aclose()
