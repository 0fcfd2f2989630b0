"""Project services: tenant management and the schema registry."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

import structlog

from lightlog.core.database import Database
from lightlog.core.errors import BadRequestError, NotFoundError
from lightlog.modules.projects.repos import ProjectRepository
from lightlog.modules.projects.schemas import (
    ProjectCreate,
    ProjectResponse,
    SchemaDefinition,
    parse_schema_definition,
)


logger = structlog.get_logger()


def parse_project_id(raw: str) -> UUID:
    """Parse a project ID path parameter.

    Raises:
        BadRequestError: If the value isn't a UUID
    """
    try:
        return UUID(raw)
    except (TypeError, ValueError) as exc:
        raise BadRequestError("Invalid project ID") from exc


@dataclass(frozen=True)
class ProjectContext:
    """A project resolved from its data-plane token."""

    id: UUID
    name: str
    schema: SchemaDefinition | None


class ProjectService:
    """Service for creating, listing, and deleting projects."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_project(self, data: ProjectCreate) -> ProjectResponse:
        """Create a project and issue its token."""
        async with self.db.transaction() as session:
            project = await ProjectRepository(session).create(data.name)
            logger.info("project_created", project_id=str(project.id), name=project.name)
            return ProjectResponse.model_validate(project)

    async def list_projects(self) -> list[ProjectResponse]:
        """List all projects, newest first."""
        async with self.db.session() as session:
            projects = await ProjectRepository(session).list_all()
            return [ProjectResponse.model_validate(p) for p in projects]

    async def get_project(self, project_id: UUID) -> ProjectResponse:
        """Get a project by ID.

        Raises:
            NotFoundError: If the project doesn't exist
        """
        async with self.db.session() as session:
            project = await ProjectRepository(session).get_by_id(project_id)
            if project is None:
                raise NotFoundError("Project not found")
            return ProjectResponse.model_validate(project)

    async def delete_project(self, project_id: UUID) -> None:
        """Delete a project.

        Raises:
            NotFoundError: If the project doesn't exist
        """
        async with self.db.transaction() as session:
            repo = ProjectRepository(session)
            project = await repo.get_by_id(project_id)
            if project is None:
                logger.warning("project_not_found", project_id=str(project_id))
                raise NotFoundError("Project not found")
            await repo.delete(project)
        logger.info("project_deleted", project_id=str(project_id))

    async def get_by_token(self, token: str) -> ProjectContext | None:
        """Resolve a data-plane token to its project and schema."""
        async with self.db.session() as session:
            project = await ProjectRepository(session).get_by_token(token)
            if project is None:
                return None
            return ProjectContext(
                id=project.id,
                name=project.name,
                schema=(
                    SchemaDefinition.model_validate(project.schema)
                    if project.schema
                    else None
                ),
            )


class SchemaRegistry:
    """Per-project schema storage.

    Schemas are replaced wholesale; a submitted schema is shape-validated in
    full before the stored one is touched.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    async def get_schema(self, project_id: UUID) -> dict[str, Any] | None:
        """Get a project's stored schema.

        Raises:
            NotFoundError: If the project doesn't exist
        """
        async with self.db.session() as session:
            project = await ProjectRepository(session).get_by_id(project_id)
            if project is None:
                raise NotFoundError("Project not found")
            return project.schema

    async def update_schema(self, project_id: UUID, payload: Any) -> dict[str, Any]:
        """Replace a project's schema.

        Args:
            project_id: The project's UUID
            payload: The submitted ``schema`` object

        Returns:
            The stored schema

        Raises:
            ValidationError: If the schema shape is invalid (nothing is stored)
            NotFoundError: If the project doesn't exist
        """
        definition = parse_schema_definition(payload)
        stored = definition.to_storage()

        async with self.db.transaction() as session:
            project = await ProjectRepository(session).get_by_id_for_update(project_id)
            if project is None:
                raise NotFoundError("Project not found")
            project.schema = stored

        logger.info(
            "schema_updated",
            project_id=str(project_id),
            field_count=len(definition.fields),
        )
        return stored
