"""Logging module with structured logging and request tracking."""

from lightlog.core.logging.config import configure_logging
from lightlog.core.logging.middleware import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
)


__all__ = [
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "configure_logging",
]
