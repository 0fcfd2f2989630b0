"""Destinations for accepted log events."""

from collections.abc import Sequence
from typing import Any, Protocol
from uuid import UUID

import structlog


logger = structlog.get_logger()


class EventSink(Protocol):
    """Receives validated events for a project.

    ``store`` returns how many events it acknowledged.
    """

    async def store(
        self, project_id: UUID, events: Sequence[dict[str, Any]]
    ) -> int: ...


class LoggingEventSink:
    """Sink that records accepted batches in the application log only."""

    async def store(self, project_id: UUID, events: Sequence[dict[str, Any]]) -> int:
        logger.info("logs_received", project_id=str(project_id), count=len(events))
        return len(events)


class MemoryEventSink:
    """Sink that keeps events in memory, grouped by project."""

    def __init__(self) -> None:
        self.events: dict[UUID, list[dict[str, Any]]] = {}

    async def store(self, project_id: UUID, events: Sequence[dict[str, Any]]) -> int:
        self.events.setdefault(project_id, []).extend(events)
        return len(events)
