"""Authentication service for login, token verification, and logout."""

from datetime import timedelta

import structlog

from lightlog.core.auth.backend import PasswordHasher, token_prefix
from lightlog.core.database import Database
from lightlog.core.errors import UnauthorizedError
from lightlog.modules.sessions.repos import SessionRepository
from lightlog.modules.users.repos import UserRepository
from lightlog.modules.users.schemas import LoginResponse, UserResponse


logger = structlog.get_logger()


class AuthService:
    """Service for session-based authentication.

    Every successful ``verify`` slides the session's expiry forward, so a
    session stays alive as long as it is used at least once per lifetime.
    """

    def __init__(
        self,
        db: Database,
        hasher: PasswordHasher,
        session_lifetime: timedelta,
    ) -> None:
        self.db = db
        self.hasher = hasher
        self.session_lifetime = session_lifetime

    async def login(
        self,
        username: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> LoginResponse:
        """Authenticate a user and open a session.

        Args:
            username: The user's username
            password: Plain text password
            ip_address: Client IP address
            user_agent: Client user agent

        Returns:
            The session token, its expiry, and the user

        Raises:
            UnauthorizedError: If the credentials are invalid
        """
        async with self.db.transaction() as session:
            user_repo = UserRepository(session)
            user = await user_repo.get_by_username(username)
            if user is None or not self.hasher.verify(password, user.password_hash):
                logger.info("login_failed", username=username)
                raise UnauthorizedError(
                    "Invalid credentials",
                    error_code="invalid_credentials",
                )

            await user_repo.touch_last_login(user)
            user_session = await SessionRepository(
                session, self.session_lifetime
            ).create(user.id, ip_address, user_agent)

            logger.info("login_succeeded", user_id=str(user.id))
            return LoginResponse(
                token=user_session.token,
                user=UserResponse.model_validate(user),
                expires_at=user_session.expires_at,
            )

    async def verify(self, token: str) -> UserResponse | None:
        """Resolve a session token to its user and extend the session.

        Expired sessions are purged first, then the token is looked up among
        the remaining ones. All of it runs in one transaction.

        Args:
            token: The bearer token

        Returns:
            The user if the token belongs to an active session, else None
        """
        async with self.db.transaction() as session:
            sessions = SessionRepository(session, self.session_lifetime)
            purged = await sessions.delete_expired()
            if purged:
                logger.debug("expired_sessions_purged", count=purged)

            user_session = await sessions.get_by_token(token)
            if user_session is None:
                logger.info("session_not_found", token=token_prefix(token))
                return None

            user = await UserRepository(session).get_by_id(user_session.user_id)
            if user is None:
                logger.warning("session_user_missing", session_id=user_session.id)
                return None

            await sessions.extend(token)
            return UserResponse.model_validate(user)

    async def logout(self, token: str) -> bool:
        """Delete the session behind a token.

        Args:
            token: The bearer token

        Returns:
            True if a session was deleted
        """
        async with self.db.transaction() as session:
            deleted = await SessionRepository(session).delete(token)
        logger.info("logout", token=token_prefix(token), deleted=deleted)
        return deleted
