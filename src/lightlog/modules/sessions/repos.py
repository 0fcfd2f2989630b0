"""Session store: persistence operations for user sessions."""

import secrets
from datetime import timedelta
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lightlog.core.constants import (
    SESSION_ID_BYTES,
    SESSION_LIFETIME_HOURS,
    SESSION_TOKEN_BYTES,
)
from lightlog.core.database.base import utc_now
from lightlog.modules.sessions.models import UserSession


class SessionRepository:
    """Repository for UserSession database operations.

    Expired sessions are not swept in the background; they are purged
    lazily by ``delete_expired`` before each token lookup. The purge is a
    plain ``DELETE ... WHERE expires_at <= now`` and can run from several
    workers at once.
    """

    def __init__(
        self,
        session: AsyncSession,
        lifetime: timedelta = timedelta(hours=SESSION_LIFETIME_HOURS),
    ) -> None:
        self.session = session
        self.lifetime = lifetime

    async def create(
        self,
        user_id: UUID,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> UserSession:
        """Create a new active session.

        Args:
            user_id: The owning user's UUID
            ip_address: Client IP address
            user_agent: Client user agent

        Returns:
            The created session, including its token
        """
        user_session = UserSession(
            id=secrets.token_hex(SESSION_ID_BYTES),
            user_id=user_id,
            token=secrets.token_hex(SESSION_TOKEN_BYTES),
            ip_address=ip_address,
            user_agent=user_agent,
            expires_at=utc_now() + self.lifetime,
        )
        self.session.add(user_session)
        await self.session.flush()
        return user_session

    async def get_by_token(self, token: str) -> UserSession | None:
        """Get a non-expired session by its exact token.

        Args:
            token: The bearer token

        Returns:
            The session if found and active, None otherwise
        """
        stmt = select(UserSession).where(
            UserSession.token == token,
            UserSession.expires_at > utc_now(),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def extend(self, token: str) -> bool:
        """Slide an active session's expiry to now + lifetime.

        Args:
            token: The bearer token

        Returns:
            True if an active session was extended, False otherwise
        """
        now = utc_now()
        stmt = (
            update(UserSession)
            .where(UserSession.token == token, UserSession.expires_at > now)
            .values(expires_at=now + self.lifetime)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def delete(self, token: str) -> bool:
        """Delete a session by token, whatever its state.

        Args:
            token: The bearer token

        Returns:
            True if a row was deleted
        """
        result = await self.session.execute(
            delete(UserSession).where(UserSession.token == token)
        )
        return result.rowcount > 0

    async def delete_expired(self) -> int:
        """Delete every session whose expiry has passed.

        Returns:
            Number of sessions deleted
        """
        result = await self.session.execute(
            delete(UserSession).where(UserSession.expires_at <= utc_now())
        )
        return result.rowcount

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete all sessions owned by a user.

        Args:
            user_id: The user's UUID

        Returns:
            Number of sessions deleted
        """
        result = await self.session.execute(
            delete(UserSession).where(UserSession.user_id == user_id)
        )
        return result.rowcount
