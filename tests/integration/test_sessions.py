"""Integration tests for the session store and token verification."""

from datetime import timedelta

import pytest
from sqlalchemy import select, update

from lightlog.api import Services
from lightlog.core.database import Database, utc_now
from lightlog.modules.sessions.models import UserSession
from lightlog.modules.sessions.repos import SessionRepository
from lightlog.modules.users.schemas import UserResponse


pytestmark = pytest.mark.integration


async def expire(database: Database, token: str) -> None:
    async with database.transaction() as session:
        await session.execute(
            update(UserSession)
            .where(UserSession.token == token)
            .values(expires_at=utc_now() - timedelta(seconds=1))
        )


async def load(database: Database, token: str) -> UserSession | None:
    async with database.session() as session:
        result = await session.execute(
            select(UserSession).where(UserSession.token == token)
        )
        return result.scalar_one_or_none()


class TestSessionRepository:
    """Tests for SessionRepository."""

    async def test_create_issues_random_identifiers(
        self, database: Database, user: UserResponse
    ):
        async with database.transaction() as session:
            repo = SessionRepository(session)
            first = await repo.create(user.id, "10.0.0.1", "pytest")
            second = await repo.create(user.id)

        assert len(first.id) == 64
        assert len(first.token) == 128
        assert first.token != second.token
        assert first.ip_address == "10.0.0.1"
        assert first.user_agent == "pytest"

    async def test_new_session_lasts_a_day(self, database: Database, user: UserResponse):
        async with database.transaction() as session:
            created = await SessionRepository(session).create(user.id)

        remaining = created.expires_at - utc_now()
        assert timedelta(hours=23, minutes=59) < remaining <= timedelta(hours=24)

    async def test_get_by_token_ignores_expired(
        self, database: Database, user: UserResponse
    ):
        async with database.transaction() as session:
            created = await SessionRepository(session).create(user.id)
        await expire(database, created.token)

        async with database.session() as session:
            assert await SessionRepository(session).get_by_token(created.token) is None

    async def test_extend_only_touches_active_sessions(
        self, database: Database, user: UserResponse
    ):
        async with database.transaction() as session:
            repo = SessionRepository(session)
            active = await repo.create(user.id)
            stale = await repo.create(user.id)
        await expire(database, stale.token)

        async with database.transaction() as session:
            repo = SessionRepository(session)
            assert await repo.extend(active.token) is True
            assert await repo.extend(stale.token) is False
            assert await repo.extend("unknown") is False

    async def test_delete_is_idempotent(self, database: Database, user: UserResponse):
        async with database.transaction() as session:
            created = await SessionRepository(session).create(user.id)

        async with database.transaction() as session:
            assert await SessionRepository(session).delete(created.token) is True
        async with database.transaction() as session:
            assert await SessionRepository(session).delete(created.token) is False

    async def test_delete_expired_keeps_active_sessions(
        self, database: Database, user: UserResponse
    ):
        async with database.transaction() as session:
            repo = SessionRepository(session)
            active = await repo.create(user.id)
            stale = await repo.create(user.id)
        await expire(database, stale.token)

        async with database.transaction() as session:
            assert await SessionRepository(session).delete_expired() == 1

        assert await load(database, stale.token) is None
        assert await load(database, active.token) is not None


class TestVerify:
    """Tests for AuthService.verify."""

    async def test_valid_token_returns_user(self, services: Services, auth_token: str):
        user = await services.auth.verify(auth_token)

        assert user is not None
        assert user.username == "alice"

    async def test_verify_slides_expiry(
        self, services: Services, database: Database, auth_token: str
    ):
        async with database.transaction() as session:
            await session.execute(
                update(UserSession)
                .where(UserSession.token == auth_token)
                .values(expires_at=utc_now() + timedelta(minutes=5))
            )

        assert await services.auth.verify(auth_token) is not None

        refreshed = await load(database, auth_token)
        assert refreshed is not None
        assert refreshed.expires_at - utc_now() > timedelta(hours=23)

    async def test_expired_token_is_rejected_and_purged(
        self, services: Services, database: Database, auth_token: str
    ):
        await expire(database, auth_token)

        assert await services.auth.verify(auth_token) is None
        assert await load(database, auth_token) is None

    async def test_unknown_token_is_rejected(self, services: Services, user: UserResponse):
        assert await services.auth.verify("not-a-real-token") is None

    async def test_project_token_is_not_a_session_token(
        self, services: Services, user: UserResponse, project
    ):
        assert await services.auth.verify(project.token) is None

    async def test_logout_invalidates_token(self, services: Services, auth_token: str):
        assert await services.auth.logout(auth_token) is True

        assert await services.auth.verify(auth_token) is None
        assert await services.auth.logout(auth_token) is False
