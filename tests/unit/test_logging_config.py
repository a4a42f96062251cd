"""
Redis Cache Store — Logging Setup Tests
"""

import json
import logging
import sys
from collections.abc import Generator

import pytest

from redis_cache_store.config import RedisStoreConfig
from redis_cache_store.observability import JSONFormatter, setup_logging, setup_logging_from_config
from redis_cache_store.observability.logging_config import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def restore_package_logger() -> Generator[None, None, None]:
    """Keep handler/level changes from leaking into other tests."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def make_record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="redis_cache_store.cache.backends.redis",
        level=logging.ERROR,
        pathname=__file__,
        lineno=10,
        msg="Redis operation '%s' failed",
        args=("get",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_fields() -> None:
    payload = json.loads(JSONFormatter().format(make_record(operation="get", key="foo")))

    assert payload["level"] == "ERROR"
    assert payload["logger"] == "redis_cache_store.cache.backends.redis"
    assert payload["message"] == "Redis operation 'get' failed"
    assert payload["line"] == 10
    assert payload["operation"] == "get"
    assert payload["key"] == "foo"
    assert payload["timestamp"].endswith("Z")
    assert "args" not in payload


def test_json_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in payload["exception"]


def test_json_formatter_stringifies_unknown_types() -> None:
    payload = json.loads(JSONFormatter().format(make_record(error=ValueError("bad"))))
    assert payload["error"] == "bad"


def test_setup_logging_json() -> None:
    logger = setup_logging("DEBUG", "json")

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JSONFormatter)


def test_setup_logging_text_replaces_handlers() -> None:
    setup_logging("INFO", "json")
    logger = setup_logging("WARNING", "text")

    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0].formatter, JSONFormatter)
    assert logger.level == logging.WARNING


def test_setup_logging_from_config() -> None:
    logger = setup_logging_from_config(RedisStoreConfig(log_level="ERROR", log_format="text"))
    assert logger.level == logging.ERROR


def test_invalid_level_rejected() -> None:
    with pytest.raises(ValueError):
        setup_logging("VERBOSE")
