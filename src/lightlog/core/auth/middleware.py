"""Authentication middleware for the gateway router.

Two token spaces exist and are never cross-accepted:
- Session tokens (control plane) resolve to a user via ``AuthService``.
- Project tokens (data plane) resolve to a project via a project lookup.
"""

from typing import Any, Protocol

import structlog
from starlette import status
from starlette.requests import Request
from starlette.responses import Response

from lightlog.core.auth.backend import extract_bearer_token
from lightlog.core.auth.service import AuthService
from lightlog.core.http.middleware import CallNext, GatewayMiddleware
from lightlog.core.http.responses import error


logger = structlog.get_logger()


class ProjectLookup(Protocol):
    """Anything that can resolve a project token."""

    async def get_by_token(self, token: str) -> Any | None: ...


def _unauthorized(message: str) -> Response:
    return error(message, status.HTTP_401_UNAUTHORIZED)


class SessionAuthMiddleware(GatewayMiddleware):
    """Require a valid session token.

    On success the user (without password hash) is stored on
    ``request.state.user`` and the token on ``request.state.auth_token``.
    """

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        """Authenticate the request or reject it with a 401."""
        header = request.headers.get("Authorization")
        if not header:
            return _unauthorized("Authentication required")

        token = extract_bearer_token(header)
        if token is None:
            return _unauthorized("Invalid authorization header")

        user = await self.auth_service.verify(token)
        if user is None:
            return _unauthorized("Invalid or expired token")

        request.state.user = user
        request.state.auth_token = token
        structlog.contextvars.bind_contextvars(user_id=str(user.id))

        return await call_next(request)


class ProjectTokenMiddleware(GatewayMiddleware):
    """Require a valid project token.

    On success the project is stored on ``request.state.project``.
    """

    def __init__(self, projects: ProjectLookup) -> None:
        self.projects = projects

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        """Resolve the project token or reject the request with a 401."""
        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            return _unauthorized(
                "Missing or invalid Authorization header. "
                "Use: Bearer YOUR_PROJECT_TOKEN"
            )

        project = await self.projects.get_by_token(token)
        if project is None:
            logger.info("project_token_rejected")
            return _unauthorized("Invalid project token")

        request.state.project = project
        structlog.contextvars.bind_contextvars(project_id=str(project.id))

        return await call_next(request)
