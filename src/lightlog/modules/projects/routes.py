"""Project management routes.

All routes require a session token:
- ``GET/POST /api/projects``
- ``GET/DELETE /api/projects/{id}``
- ``GET/PUT /api/projects/{id}/schema``
"""

from starlette import status
from starlette.requests import Request
from starlette.responses import Response

from lightlog.core.constants import MAX_NAME_LENGTH
from lightlog.core.http.middleware import GatewayMiddleware
from lightlog.core.http.requests import missing_fields, read_json
from lightlog.core.http.responses import created, error, success
from lightlog.core.http.router import Router
from lightlog.modules.projects.schemas import ProjectCreate
from lightlog.modules.projects.services import (
    ProjectService,
    SchemaRegistry,
    parse_project_id,
)


class ProjectRoutes:
    """Handlers for ``/api/projects``."""

    def __init__(self, projects: ProjectService, schemas: SchemaRegistry) -> None:
        self.projects = projects
        self.schemas = schemas

    def mount(self, router: Router, session_auth: GatewayMiddleware) -> None:
        """Register the project routes behind session authentication."""
        guarded = [session_auth]
        router.get("/api/projects", self.index, middleware=guarded)
        router.post("/api/projects", self.store, middleware=guarded)
        router.get("/api/projects/{id}", self.show, middleware=guarded)
        router.delete("/api/projects/{id}", self.destroy, middleware=guarded)
        router.get("/api/projects/{id}/schema", self.get_schema, middleware=guarded)
        router.put("/api/projects/{id}/schema", self.update_schema, middleware=guarded)

    async def index(self, request: Request) -> Response:  # noqa: ARG002
        """List all projects."""
        return success(await self.projects.list_projects())

    async def store(self, request: Request) -> Response:
        """Create a project from ``{"name": ...}``."""
        data = await read_json(request)
        missing = missing_fields(data, ("name",))
        if missing:
            return error(
                "Missing required fields", status.HTTP_400_BAD_REQUEST, missing
            )

        raw_name = data["name"]
        if not isinstance(raw_name, str):
            return error("Project name must be a string", status.HTTP_400_BAD_REQUEST)

        name = raw_name.strip()
        if not name:
            return error("Project name cannot be empty", status.HTTP_400_BAD_REQUEST)
        if len(name) > MAX_NAME_LENGTH:
            return error(
                f"Project name is too long (max {MAX_NAME_LENGTH} characters)",
                status.HTTP_400_BAD_REQUEST,
            )

        project = await self.projects.create_project(ProjectCreate(name=name))
        return created(project, "Project created successfully")

    async def show(self, request: Request) -> Response:
        """Get one project."""
        project_id = parse_project_id(request.path_params["id"])
        return success(await self.projects.get_project(project_id))

    async def destroy(self, request: Request) -> Response:
        """Delete a project."""
        project_id = parse_project_id(request.path_params["id"])
        await self.projects.delete_project(project_id)
        return success(message="Project deleted successfully")

    async def get_schema(self, request: Request) -> Response:
        """Get a project's schema (``null`` if none is set)."""
        project_id = parse_project_id(request.path_params["id"])
        return success({"schema": await self.schemas.get_schema(project_id)})

    async def update_schema(self, request: Request) -> Response:
        """Replace a project's schema with ``{"schema": {"fields": [...]}}``."""
        project_id = parse_project_id(request.path_params["id"])
        data = await read_json(request)
        payload = data.get("schema") if isinstance(data, dict) else None

        stored = await self.schemas.update_schema(project_id, payload)
        return success({"schema": stored}, "Schema updated successfully")
