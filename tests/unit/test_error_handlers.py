"""Tests for the Problem Details exception handlers."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel
from sqlalchemy.exc import OperationalError

from helpdesk.core.errors import (
    DuplicateNameError,
    NotFoundError,
    register_exception_handlers,
)


pytestmark = pytest.mark.unit


class Payload(BaseModel):
    name: str


@pytest.fixture
async def error_client() -> AsyncGenerator[AsyncClient, None]:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/duplicate")
    async def duplicate() -> None:
        raise DuplicateNameError("Role already exists", details={"name": "billing"})

    @app.get("/missing")
    async def missing() -> None:
        raise NotFoundError("Role not found", resource="role", resource_id="42")

    @app.get("/store")
    async def store() -> None:
        raise OperationalError("SELECT * FROM roles", {}, Exception("password=secret"))

    @app.post("/validate")
    async def validate(payload: Payload) -> Payload:
        return payload

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


class TestExceptionHandlers:
    """Tests for register_exception_handlers."""

    async def test_duplicate_name(self, error_client: AsyncClient):
        response = await error_client.get("/duplicate")

        assert response.status_code == 400
        data = response.json()
        assert data["title"] == "Duplicate Name"
        assert data["detail"] == "Role already exists"
        assert data["instance"] == "/duplicate"
        assert data["name"] == "billing"

    async def test_not_found_details(self, error_client: AsyncClient):
        response = await error_client.get("/missing")

        assert response.status_code == 404
        data = response.json()
        assert data["resource"] == "role"
        assert data["resource_id"] == "42"

    async def test_store_failure_hides_driver_error(self, error_client: AsyncClient):
        response = await error_client.get("/store")

        assert response.status_code == 500
        data = response.json()
        assert data["type"].endswith("/errors/store_error")
        assert "secret" not in response.text
        assert "SELECT" not in response.text

    async def test_validation_error_lists_fields(self, error_client: AsyncClient):
        response = await error_client.post("/validate", json={})

        assert response.status_code == 422
        data = response.json()
        assert data["title"] == "Validation Error"
        assert [error["field"] for error in data["errors"]] == ["name"]
