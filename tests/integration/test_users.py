"""Integration tests for user management."""

import pytest
from sqlalchemy import func, select

from lightlog.api import Services
from lightlog.core.database import Database
from lightlog.core.errors import ConflictError, NotFoundError, UnauthorizedError
from lightlog.modules.sessions.models import UserSession
from lightlog.modules.users.models import User
from lightlog.modules.users.schemas import UserCreate, UserResponse


pytestmark = pytest.mark.integration


async def session_count(database: Database) -> int:
    async with database.session() as session:
        return (await session.execute(select(func.count(UserSession.id)))).scalar_one()


class TestUserService:
    """Tests for UserService."""

    async def test_wrong_password_raises(self, services: Services, user: UserResponse):
        with pytest.raises(UnauthorizedError, match="Invalid credentials"):
            await services.auth.login("alice", "wrong-password-1")

    async def test_duplicate_username(self, services: Services, user: UserResponse):
        with pytest.raises(ConflictError, match="Username already taken"):
            await services.users.create_user(
                UserCreate(username="alice", email="other@example.com", password="x" * 8)
            )

    async def test_duplicate_email(self, services: Services, user: UserResponse):
        with pytest.raises(ConflictError, match="Email already registered"):
            await services.users.create_user(
                UserCreate(username="bob", email="alice@example.com", password="x" * 8)
            )

    async def test_delete_removes_sessions(
        self,
        services: Services,
        database: Database,
        user: UserResponse,
        password: str,
    ):
        await services.auth.login("alice", password)
        await services.auth.login("alice", password)
        assert await session_count(database) == 2

        removed = await services.users.delete_user("alice")

        assert removed == 2
        assert await session_count(database) == 0
        async with database.session() as session:
            assert await session.get(User, user.id) is None

    async def test_delete_unknown_user(self, services: Services):
        with pytest.raises(NotFoundError):
            await services.users.delete_user("ghost")
