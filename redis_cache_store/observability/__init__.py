"""
Redis Cache Store — Observability Module

Structured logging setup.
"""

from .logging_config import JSONFormatter, setup_logging, setup_logging_from_config

__all__ = [
    "JSONFormatter",
    "setup_logging",
    "setup_logging_from_config",
]
