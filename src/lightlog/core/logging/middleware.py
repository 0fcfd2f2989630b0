"""Request tracing and logging middleware.

``RequestIdMiddleware`` runs on the ASGI host and tags every request with an
ID. ``RequestLoggingMiddleware`` runs inside the gateway router, so it only
sees requests that matched a route and can report route-level context.
"""

import time
import uuid
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from lightlog.core.http.middleware import CallNext, GatewayMiddleware


logger = structlog.get_logger()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that adds a unique request ID to each request.

    The request ID is added to:
    - request.state.request_id
    - Response header X-Request-ID
    - Structlog context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process the request and add request ID.

        Args:
            request: The incoming request
            call_next: The next middleware/handler

        Returns:
            The response with X-Request-ID header
        """
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers["X-Request-ID"] = request_id
        return response


class RequestLoggingMiddleware(GatewayMiddleware):
    """Gateway middleware that logs routed requests and their outcome.

    Logs include method, path, status code, duration, and the user or
    project id once authentication has attached one.
    """

    def __init__(self, exclude_paths: list[str] | None = None) -> None:
        self.exclude_paths = exclude_paths or ["/health"]

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        """Process the request and log details."""
        path = request.url.path
        if any(path.startswith(excluded) for excluded in self.exclude_paths):
            return await call_next(request)

        start_time = time.perf_counter()
        logger.info(
            "request_started",
            method=request.method,
            path=path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request_failed",
                method=request.method,
                path=path,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error=str(exc),
            )
            raise

        completion_data: dict[str, Any] = {
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
        }

        user = getattr(request.state, "user", None)
        project = getattr(request.state, "project", None)
        if user is not None:
            completion_data["user_id"] = str(user.id)
        if project is not None:
            completion_data["project_id"] = str(project.id)

        if response.status_code >= 500:
            logger.error("request_completed", **completion_data)
        elif response.status_code >= 400:
            logger.warning("request_completed", **completion_data)
        else:
            logger.info("request_completed", **completion_data)

        return response
