"""Gateway route table.

Public:
- ``GET /health``, ``GET /health/ready``
- ``POST /api/auth/login``, ``POST /api/auth/check``

Session token (control plane):
- ``POST /api/auth/logout``, ``GET /api/auth/me``
- ``/api/projects`` and ``/api/projects/{id}[/schema]``

Project token (data plane):
- ``POST /api/v1/logs``
"""

from lightlog.api.dependencies import Services
from lightlog.core.auth import ProjectTokenMiddleware, SessionAuthMiddleware
from lightlog.core.auth.routes import AuthRoutes
from lightlog.core.health import HealthRoutes
from lightlog.core.http.router import CorsPolicy, Router
from lightlog.core.logging import RequestLoggingMiddleware
from lightlog.modules.logs.routes import LogRoutes
from lightlog.modules.projects.routes import ProjectRoutes


def build_router(services: Services) -> Router:
    """Build the gateway router with every route registered.

    Args:
        services: The application's service container

    Returns:
        The router, ready to be mounted on the ASGI host
    """
    settings = services.settings
    router = Router(
        middleware=[RequestLoggingMiddleware()],
        cors=CorsPolicy.from_settings(settings),
    )

    session_auth = SessionAuthMiddleware(services.auth)
    project_auth = ProjectTokenMiddleware(services.projects)

    HealthRoutes(services.db).mount(router)
    AuthRoutes(services.auth).mount(router, session_auth)
    ProjectRoutes(services.projects, services.schemas).mount(router, session_auth)
    LogRoutes(
        services.validator,
        services.sink,
        max_batch_size=settings.max_batch_size,
    ).mount(router, project_auth)

    return router
