"""Health check endpoints.

- ``GET /health``: liveness, answers while the process is serving
- ``GET /health/ready``: readiness, also checks the database
"""

import time

import structlog
from sqlalchemy.exc import SQLAlchemyError
from starlette import status
from starlette.requests import Request
from starlette.responses import Response

from lightlog.core.database import Database
from lightlog.core.http.responses import json_response
from lightlog.core.http.router import Router


logger = structlog.get_logger()


class HealthRoutes:
    """Handlers for the health probes."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def mount(self, router: Router) -> None:
        """Register the probes; neither requires authentication."""
        router.get("/health", self.liveness)
        router.get("/health/ready", self.readiness)

    async def liveness(self, request: Request) -> Response:  # noqa: ARG002
        """Liveness probe endpoint."""
        return json_response({"status": "ok", "time": int(time.time())})

    async def readiness(self, request: Request) -> Response:  # noqa: ARG002
        """Readiness probe endpoint."""
        checks: dict[str, str] = {}

        try:
            await self.db.ping()
            checks["database"] = "ok"
        except (SQLAlchemyError, OSError) as e:
            logger.warning("readiness_check_failed", check="database", error=str(e))
            checks["database"] = str(e)

        all_ok = all(v == "ok" for v in checks.values())

        return json_response(
            {
                "status": "ready" if all_ok else "degraded",
                "checks": checks,
            },
            status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
