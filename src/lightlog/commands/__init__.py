"""CLI commands for lightlog."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from lightlog.api import Services, build_services
from lightlog.config import get_settings
from lightlog.core.database import Database


T = TypeVar("T")


def run_with_services(operation: Callable[[Services], Awaitable[T]]) -> T:
    """Run an async operation against freshly built services.

    The database handle is disposed when the operation finishes.
    """
    settings = get_settings()

    async def runner() -> T:
        db = Database.from_settings(settings)
        try:
            return await operation(build_services(settings, db))
        finally:
            await db.dispose()

    return asyncio.run(runner())
