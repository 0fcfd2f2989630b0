"""Project (tenant) database model."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from lightlog.core.constants import MAX_NAME_LENGTH, PROJECT_TOKEN_LENGTH
from lightlog.core.database.base import Base, TimestampMixin, UUIDMixin


class Project(Base, UUIDMixin, TimestampMixin):
    """An isolated log-ingestion namespace.

    Attributes:
        name: Display name
        token: Data-plane bearer token; unique and never changed once issued
        schema: The project's schema definition (``{"fields": [...]}``),
            replaced wholesale on update, or None when unset
    """

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    token: Mapped[str] = mapped_column(
        String(PROJECT_TOKEN_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    schema: Mapped[dict[str, Any] | None] = mapped_column(
        "schema",
        JSON,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"
