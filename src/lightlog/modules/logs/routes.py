"""Log ingestion route.

``POST /api/v1/logs`` accepts a single event object or a batch wrapped as
``{"logs": [...]}``. Each item is validated independently against the
project's schema; valid items are handed to the event sink even when
others in the batch are rejected.
"""

from typing import Any

import structlog
from starlette import status
from starlette.requests import Request
from starlette.responses import Response

from lightlog.core.http.middleware import GatewayMiddleware
from lightlog.core.http.requests import read_json
from lightlog.core.http.responses import error, json_response, success
from lightlog.core.http.router import Router
from lightlog.modules.logs.sinks import EventSink
from lightlog.modules.logs.validator import EventValidator
from lightlog.modules.projects.services import ProjectContext


logger = structlog.get_logger()


class LogRoutes:
    """Handlers for ``/api/v1/logs``."""

    def __init__(
        self,
        validator: EventValidator,
        sink: EventSink,
        max_batch_size: int,
    ) -> None:
        self.validator = validator
        self.sink = sink
        self.max_batch_size = max_batch_size

    def mount(self, router: Router, project_auth: GatewayMiddleware) -> None:
        """Register the ingestion route behind project-token authentication."""
        router.post("/api/v1/logs", self.ingest, middleware=[project_auth])

    async def ingest(self, request: Request) -> Response:
        """Validate and accept one event or a batch of events."""
        project: ProjectContext = request.state.project

        data = await read_json(request)
        if not isinstance(data, dict):
            return error("Invalid JSON body", status.HTTP_400_BAD_REQUEST)

        items: Any = data["logs"] if "logs" in data else [data]
        if not isinstance(items, list):
            return error("Logs must be an array", status.HTTP_400_BAD_REQUEST)
        if len(items) > self.max_batch_size:
            return error(
                f"Too many logs in one request (max {self.max_batch_size})",
                status.HTTP_400_BAD_REQUEST,
            )

        accepted: list[dict[str, Any]] = []
        rejected: list[dict[str, Any]] = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                rejected.append(
                    {
                        "index": index,
                        "errors": [{"field": "log", "error": "Log must be an object"}],
                    }
                )
                continue

            result = self.validator.validate(item, project.schema)
            if result.accepted:
                accepted.append({**item, "project_id": str(project.id)})
            else:
                rejected.append({"index": index, "errors": result.errors})

        if accepted:
            await self.sink.store(project.id, accepted)

        if rejected:
            logger.info(
                "logs_rejected",
                project_id=str(project.id),
                accepted=len(accepted),
                rejected=len(rejected),
            )
            return json_response(
                {
                    "success": False,
                    "message": "Some logs failed validation",
                    "accepted": len(accepted),
                    "rejected": len(rejected),
                    "errors": rejected,
                },
                422,
            )

        return success(
            {"accepted": len(accepted), "project": project.name},
            "Logs received successfully",
        )
