"""Tests for lightlog CLI commands."""

from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from lightlog import __version__
from lightlog.cli import app
from lightlog.config import get_settings


runner = CliRunner()


@pytest.fixture
def cli_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[str, None, None]:
    """Point the CLI at a fresh SQLite database with tables created."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    get_settings.cache_clear()

    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 0, result.stdout

    yield url
    get_settings.cache_clear()


class TestVersion:
    """Tests for the version flag."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestInitDb:
    """Tests for lightlog init-db."""

    def test_creates_tables(self, cli_database: str) -> None:
        # Running twice is harmless
        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database tables created" in result.stdout


class TestUsers:
    """Tests for lightlog create-user and delete-user."""

    def test_create_user(self, cli_database: str) -> None:
        result = runner.invoke(
            app, ["create-user", "alice", "alice@example.com", "--password", "s3cret-pass"]
        )

        assert result.exit_code == 0
        assert "Created user" in result.stdout
        assert "alice" in result.stdout

    def test_duplicate_user(self, cli_database: str) -> None:
        args = ["create-user", "alice", "alice@example.com", "--password", "s3cret-pass"]
        runner.invoke(app, args)

        result = runner.invoke(app, args)

        assert result.exit_code == 1
        assert "Username already taken" in result.stdout

    def test_short_password(self, cli_database: str) -> None:
        result = runner.invoke(
            app, ["create-user", "alice", "alice@example.com", "--password", "short"]
        )

        assert result.exit_code == 1
        assert "password" in result.stdout

    def test_delete_user(self, cli_database: str) -> None:
        runner.invoke(
            app, ["create-user", "alice", "alice@example.com", "--password", "s3cret-pass"]
        )

        result = runner.invoke(app, ["delete-user", "alice", "--force"])

        assert result.exit_code == 0
        assert "Deleted user" in result.stdout

    def test_delete_unknown_user(self, cli_database: str) -> None:
        result = runner.invoke(app, ["delete-user", "ghost", "--force"])

        assert result.exit_code == 1
        assert "User not found" in result.stdout

    def test_delete_can_be_cancelled(self, cli_database: str) -> None:
        result = runner.invoke(app, ["delete-user", "alice"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.stdout


class TestCreateProject:
    """Tests for lightlog create-project."""

    def test_prints_token(self, cli_database: str) -> None:
        result = runner.invoke(app, ["create-project", "Checkout"])

        assert result.exit_code == 0
        assert "Project created" in result.stdout
        assert "Token" in result.stdout

    def test_blank_name(self, cli_database: str) -> None:
        result = runner.invoke(app, ["create-project", "   "])

        assert result.exit_code == 1
        assert "Project name cannot be empty" in result.stdout
