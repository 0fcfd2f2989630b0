"""User service for account management."""

import structlog

from lightlog.core.auth.backend import PasswordHasher
from lightlog.core.database import Database
from lightlog.core.errors import ConflictError, NotFoundError
from lightlog.modules.sessions.repos import SessionRepository
from lightlog.modules.users.models import User
from lightlog.modules.users.repos import UserRepository
from lightlog.modules.users.schemas import UserCreate, UserResponse


logger = structlog.get_logger()


class UserService:
    """Service for user operations.

    Handles account creation and deletion. Deleting a user also deletes
    all of that user's sessions in the same transaction.
    """

    def __init__(self, db: Database, hasher: PasswordHasher) -> None:
        self.db = db
        self.hasher = hasher

    async def create_user(self, data: UserCreate) -> UserResponse:
        """Create a user account.

        Args:
            data: Validated user data

        Returns:
            The created user

        Raises:
            ConflictError: If the username or email is already taken
        """
        async with self.db.transaction() as session:
            repo = UserRepository(session)
            if await repo.get_by_username(data.username):
                raise ConflictError("Username already taken")
            if await repo.get_by_email(data.email):
                raise ConflictError("Email already registered")

            user = await repo.create(
                User(
                    username=data.username,
                    email=data.email,
                    password_hash=self.hasher.hash(data.password),
                )
            )
            logger.info("user_created", user_id=str(user.id), username=user.username)
            return UserResponse.model_validate(user)

    async def delete_user(self, username: str) -> int:
        """Delete a user and every session the user owns.

        Args:
            username: The user's username

        Returns:
            Number of sessions removed with the user

        Raises:
            NotFoundError: If the user doesn't exist
        """
        async with self.db.transaction() as session:
            repo = UserRepository(session)
            user = await repo.get_by_username(username)
            if user is None:
                raise NotFoundError("User not found")

            removed = await SessionRepository(session).delete_for_user(user.id)
            await repo.delete(user)
            logger.info("user_deleted", user_id=str(user.id), sessions_removed=removed)
            return removed
