"""
Redis Cache Store — Logging Setup

Structured logging for the package logger. Modules log through
logging.getLogger(__name__) with ``extra`` fields; this module only decides
how those records are rendered. Nothing here runs on import.
"""

import json
import logging
from datetime import UTC, datetime

from ..config import LogFormat, LogLevel, RedisStoreConfig

PACKAGE_LOGGER = "redis_cache_store"

# LogRecord attributes that are not user-supplied extra fields
_RESERVED_ATTRS = frozenset(
    (
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    )
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(
    level: LogLevel | str = LogLevel.INFO,
    fmt: LogFormat | str = LogFormat.JSON,
) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Args:
        level: Log level name
        fmt: "json" for JSONFormatter, "text" for a plain formatter

    Returns:
        The configured package logger
    """
    level_name = LogLevel(level).value
    log_format = LogFormat(fmt)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    if log_format is LogFormat.JSON:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level_name)

    return logger


def setup_logging_from_config(config: RedisStoreConfig) -> logging.Logger:
    """Configure the package logger from the loaded configuration."""
    return setup_logging(config.log_level, config.log_format)
