"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; point them at a throwaway database first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from lightlog.api import Services
from lightlog.config import Settings
from lightlog.core.database import Database
from lightlog.main import create_app
from lightlog.modules.logs.sinks import MemoryEventSink
from lightlog.modules.projects.schemas import ProjectCreate, ProjectResponse
from lightlog.modules.users.schemas import UserCreate, UserResponse


TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test SQLite file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'lightlog.db'}",
        environment="test",
        bcrypt_rounds=4,
        max_batch_size=10,
    )


@pytest.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Create the schema in a fresh database and dispose it afterwards."""
    db = Database(settings.database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def sink() -> MemoryEventSink:
    """Event sink that keeps accepted events for inspection."""
    return MemoryEventSink()


@pytest.fixture
def app(settings: Settings, database: Database, sink: MemoryEventSink) -> FastAPI:
    """Create test application instance."""
    return create_app(settings=settings, database=database, sink=sink)


@pytest.fixture
def services(app: FastAPI) -> Services:
    """The application's service container."""
    return app.state.services


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# User and Project Fixtures
# ============================================================


@pytest.fixture
def password() -> str:
    """The test user's password."""
    return TEST_PASSWORD


@pytest.fixture
async def user(services: Services) -> UserResponse:
    """Create a test user whose password is ``TEST_PASSWORD``."""
    return await services.users.create_user(
        UserCreate(username="alice", email="alice@example.com", password=TEST_PASSWORD)
    )


@pytest.fixture
async def auth_token(services: Services, user: UserResponse) -> str:
    """Log the test user in and return the session token."""
    result = await services.auth.login(user.username, TEST_PASSWORD)
    return result.token


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Authorization headers carrying the session token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def project(services: Services) -> ProjectResponse:
    """Create a test project without a schema."""
    return await services.projects.create_project(ProjectCreate(name="Checkout"))


@pytest.fixture
def project_headers(project: ProjectResponse) -> dict[str, str]:
    """Authorization headers carrying the project token."""
    return {"Authorization": f"Bearer {project.token}"}
