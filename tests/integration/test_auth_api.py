"""Integration tests for the control-plane auth endpoints."""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select, update

from lightlog.core.constants import MAX_IPV6_LENGTH, MAX_USER_AGENT_LENGTH
from lightlog.core.database import Database, utc_now
from lightlog.modules.sessions.models import UserSession
from lightlog.modules.users.models import User
from lightlog.modules.users.schemas import UserResponse


pytestmark = pytest.mark.integration


class TestLogin:
    """Tests for POST /api/auth/login."""

    async def test_login_returns_token_and_user(
        self, client: AsyncClient, user: UserResponse, password: str
    ):
        response = await client.post(
            "/api/auth/login",
            json={"username": "alice", "password": password},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert len(data["token"]) == 128
        assert data["user"]["username"] == "alice"
        assert "password_hash" not in data["user"]
        assert data["expires_at"]

    async def test_login_records_client_and_last_login(
        self,
        client: AsyncClient,
        database: Database,
        user: UserResponse,
        password: str,
    ):
        response = await client.post(
            "/api/auth/login",
            json={"username": "alice", "password": password},
            headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1", "User-Agent": "cli/1"},
        )
        token = response.json()["data"]["token"]

        async with database.session() as session:
            stored = (
                await session.execute(
                    select(UserSession).where(UserSession.token == token)
                )
            ).scalar_one()
        assert stored.ip_address == "203.0.113.9"
        assert stored.user_agent == "cli/1"

        async with database.session() as session:
            refreshed = await session.get(User, user.id)
        assert refreshed is not None
        assert refreshed.last_login_at is not None

    async def test_login_clips_oversized_client_info(
        self,
        client: AsyncClient,
        database: Database,
        user: UserResponse,
        password: str,
    ):
        response = await client.post(
            "/api/auth/login",
            json={"username": "alice", "password": password},
            headers={
                "X-Forwarded-For": "f" * 100 + ", 10.0.0.1",
                "User-Agent": "a" * 2000,
            },
        )

        assert response.status_code == 200
        token = response.json()["data"]["token"]
        async with database.session() as session:
            stored = (
                await session.execute(
                    select(UserSession).where(UserSession.token == token)
                )
            ).scalar_one()
        assert stored.ip_address == "f" * MAX_IPV6_LENGTH
        assert stored.user_agent == "a" * MAX_USER_AGENT_LENGTH

    async def test_wrong_password(self, client: AsyncClient, user: UserResponse):
        response = await client.post(
            "/api/auth/login",
            json={"username": "alice", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid credentials"}

    async def test_unknown_user(self, client: AsyncClient, password: str):
        response = await client.post(
            "/api/auth/login",
            json={"username": "nobody", "password": password},
        )

        assert response.status_code == 401

    async def test_missing_fields_are_listed(self, client: AsyncClient):
        response = await client.post("/api/auth/login", json={"username": "alice"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Missing required fields",
            "errors": ["password"],
        }

    async def test_non_json_body(self, client: AsyncClient):
        response = await client.post("/api/auth/login", content=b"not json")

        assert response.status_code == 400
        assert response.json()["errors"] == ["username", "password"]


class TestSessionAuthMiddleware:
    """Tests for session-token protection of control-plane routes."""

    async def test_missing_header(self, client: AsyncClient):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["message"] == "Authentication required"

    async def test_malformed_header(self, client: AsyncClient):
        response = await client.get(
            "/api/auth/me", headers={"Authorization": "Token abc"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid authorization header"

    async def test_unknown_token(self, client: AsyncClient):
        response = await client.get(
            "/api/auth/me", headers={"Authorization": "Bearer deadbeef"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    async def test_expired_token(
        self, client: AsyncClient, database: Database, auth_token: str
    ):
        async with database.transaction() as session:
            await session.execute(
                update(UserSession)
                .where(UserSession.token == auth_token)
                .values(expires_at=utc_now() - timedelta(minutes=1))
            )

        response = await client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {auth_token}"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    async def test_project_token_is_rejected(
        self, client: AsyncClient, project_headers: dict[str, str]
    ):
        response = await client.get("/api/projects", headers=project_headers)

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"


class TestMe:
    """Tests for GET /api/auth/me."""

    async def test_returns_current_user(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["username"] == "alice"
        assert user["email"] == "alice@example.com"
        assert "password_hash" not in user


class TestLogout:
    """Tests for POST /api/auth/logout."""

    async def test_logout_invalidates_token(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.post("/api/auth/logout", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"

        again = await client.get("/api/auth/me", headers=auth_headers)
        assert again.status_code == 401


class TestCheck:
    """Tests for POST /api/auth/check."""

    async def test_valid_token(self, client: AsyncClient, auth_token: str):
        response = await client.post("/api/auth/check", json={"token": auth_token})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["valid"] is True
        assert data["user"]["username"] == "alice"

    async def test_invalid_token(self, client: AsyncClient):
        response = await client.post("/api/auth/check", json={"token": "nope"})

        assert response.status_code == 200
        assert response.json()["data"] == {"valid": False}

    async def test_token_required(self, client: AsyncClient):
        response = await client.post("/api/auth/check", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Token required"


class TestHost:
    """Tests for the ASGI host around the gateway."""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert isinstance(body["time"], int)

    async def test_head_health(self, client: AsyncClient):
        response = await client.head("/health")

        assert response.status_code == 200

    async def test_request_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found"}
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    async def test_preflight(self, client: AsyncClient):
        response = await client.options("/api/v1/logs")

        assert response.status_code == 204
        assert "Authorization" in response.headers["Access-Control-Allow-Headers"]
