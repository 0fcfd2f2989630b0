"""Integration tests for project and schema endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from lightlog.modules.projects.schemas import ProjectResponse


pytestmark = pytest.mark.integration

SCHEMA = {
    "fields": [
        {
            "name": "user_id",
            "type": "string",
            "required": True,
            "indexed": True,
            "validation": {"min_length": 3},
        },
        {"name": "code", "type": "number", "required": False, "indexed": False},
    ]
}


class TestProjects:
    """Tests for /api/projects."""

    async def test_requires_session(self, client: AsyncClient):
        response = await client.get("/api/projects")

        assert response.status_code == 401

    async def test_create_project(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.post(
            "/api/projects", json={"name": "  Billing  "}, headers=auth_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Project created successfully"
        assert body["data"]["name"] == "Billing"
        assert len(body["data"]["token"]) == 64

    async def test_create_requires_name(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.post("/api/projects", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == ["name"]

    async def test_blank_name(self, client: AsyncClient, auth_headers: dict[str, str]):
        response = await client.post(
            "/api/projects", json={"name": "   "}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Project name cannot be empty"

    async def test_long_name(self, client: AsyncClient, auth_headers: dict[str, str]):
        response = await client.post(
            "/api/projects", json={"name": "x" * 256}, headers=auth_headers
        )

        assert response.status_code == 400
        assert (
            response.json()["message"]
            == "Project name is too long (max 255 characters)"
        )

    async def test_list_newest_first(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        for name in ("first", "second"):
            await client.post("/api/projects", json={"name": name}, headers=auth_headers)

        response = await client.get("/api/projects", headers=auth_headers)

        assert response.status_code == 200
        names = [p["name"] for p in response.json()["data"]]
        assert names == ["second", "first"]

    async def test_show_project(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        project: ProjectResponse,
    ):
        response = await client.get(f"/api/projects/{project.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(project.id)

    async def test_invalid_project_id(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.get("/api/projects/42", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid project ID"

    async def test_unknown_project(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.get(f"/api/projects/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Project not found"

    async def test_delete_project(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        project: ProjectResponse,
    ):
        response = await client.delete(
            f"/api/projects/{project.id}", headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Project deleted successfully"

        again = await client.delete(f"/api/projects/{project.id}", headers=auth_headers)
        assert again.status_code == 404


class TestSchema:
    """Tests for /api/projects/{id}/schema."""

    async def test_new_project_has_no_schema(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        project: ProjectResponse,
    ):
        response = await client.get(
            f"/api/projects/{project.id}/schema", headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"schema": None}

    async def test_update_then_read_back(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        project: ProjectResponse,
    ):
        url = f"/api/projects/{project.id}/schema"

        update = await client.put(url, json={"schema": SCHEMA}, headers=auth_headers)
        assert update.status_code == 200
        assert update.json()["message"] == "Schema updated successfully"
        assert update.json()["data"]["schema"] == SCHEMA

        read = await client.get(url, headers=auth_headers)
        assert read.json()["data"]["schema"] == SCHEMA

    async def test_update_replaces_wholesale(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        project: ProjectResponse,
    ):
        url = f"/api/projects/{project.id}/schema"
        replacement = {"fields": [SCHEMA["fields"][1]]}

        await client.put(url, json={"schema": SCHEMA}, headers=auth_headers)
        await client.put(url, json={"schema": replacement}, headers=auth_headers)

        read = await client.get(url, headers=auth_headers)
        assert read.json()["data"]["schema"] == replacement

    async def test_invalid_schema_is_not_stored(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        project: ProjectResponse,
    ):
        url = f"/api/projects/{project.id}/schema"
        await client.put(url, json={"schema": SCHEMA}, headers=auth_headers)

        bad = {
            "fields": [
                SCHEMA["fields"][0],
                {"name": "9lives", "type": "string", "required": "yes", "indexed": False},
            ]
        }
        response = await client.put(url, json={"schema": bad}, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid schema definition"
        assert {e["field"] for e in body["errors"]} == {
            "fields[1].name",
            "fields[1].required",
        }

        read = await client.get(url, headers=auth_headers)
        assert read.json()["data"]["schema"] == SCHEMA

    @pytest.mark.parametrize(
        ("payload", "message"),
        [
            ({}, "Schema is required"),
            ({"schema": "fields"}, "Schema must be an object"),
            ({"schema": {"fields": "user_id"}}, "Schema must contain a fields array"),
        ],
    )
    async def test_structural_errors(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        project: ProjectResponse,
        payload: dict,
        message: str,
    ):
        response = await client.put(
            f"/api/projects/{project.id}/schema", json=payload, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == message

    async def test_update_unknown_project(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.put(
            f"/api/projects/{uuid4()}/schema",
            json={"schema": SCHEMA},
            headers=auth_headers,
        )

        assert response.status_code == 404
