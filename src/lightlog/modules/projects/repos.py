"""Project repository for database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lightlog.core.auth.backend import generate_token
from lightlog.core.constants import PROJECT_TOKEN_BYTES
from lightlog.modules.projects.models import Project


class ProjectRepository:
    """Repository for Project database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, name: str) -> Project:
        """Create a project with a freshly generated token.

        Args:
            name: Display name

        Returns:
            The created project
        """
        project = Project(name=name, token=generate_token(PROJECT_TOKEN_BYTES))
        self.session.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def list_all(self) -> list[Project]:
        """List all projects, newest first."""
        result = await self.session.execute(
            select(Project).order_by(Project.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, project_id: UUID) -> Project | None:
        """Get a project by ID."""
        return await self.session.get(Project, project_id)

    async def get_by_id_for_update(self, project_id: UUID) -> Project | None:
        """Get a project by ID, locking its row until the transaction ends."""
        result = await self.session.execute(
            select(Project).where(Project.id == project_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def get_by_token(self, token: str) -> Project | None:
        """Get a project by its data-plane token."""
        result = await self.session.execute(
            select(Project).where(Project.token == token)
        )
        return result.scalar_one_or_none()

    async def delete(self, project: Project) -> None:
        """Delete a project."""
        await self.session.delete(project)
        await self.session.flush()
