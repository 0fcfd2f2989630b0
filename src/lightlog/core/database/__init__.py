"""Database layer - handle, base models, and mixins."""

from lightlog.core.database.base import Base, TimestampMixin, UUIDMixin, utc_now
from lightlog.core.database.session import Database


__all__ = [
    "Base",
    "Database",
    "TimestampMixin",
    "UUIDMixin",
    "utc_now",
]
