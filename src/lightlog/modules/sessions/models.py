"""Session database model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from lightlog.core.constants import (
    MAX_IPV6_LENGTH,
    MAX_USER_AGENT_LENGTH,
    SESSION_ID_LENGTH,
    SESSION_TOKEN_LENGTH,
)
from lightlog.core.database.base import Base, utc_now


class UserSession(Base):
    """Server-side session binding a bearer token to a user.

    Only ``expires_at`` is ever updated in place; a session otherwise lives
    until it is deleted by logout or reaped after expiry.

    Attributes:
        id: Random hex identifier
        user_id: The owning user
        token: Random hex bearer token (unique)
        ip_address: Client IP that created the session
        user_agent: Client user agent that created the session
        expires_at: End of the sliding validity window (naive UTC)
        created_at: Creation time (naive UTC)
    """

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(
        String(SESSION_ID_LENGTH),
        primary_key=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token: Mapped[str] = mapped_column(
        String(SESSION_TOKEN_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    ip_address: Mapped[str | None] = mapped_column(
        String(MAX_IPV6_LENGTH),
        nullable=True,
    )
    user_agent: Mapped[str | None] = mapped_column(
        String(MAX_USER_AGENT_LENGTH),
        nullable=True,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(),
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<UserSession(id={self.id}, user_id={self.user_id})>"
