"""Integration tests for PermissionGuard on a standalone router.

The routes below stand in for any feature module: they only call
``guard.require`` and report who got through.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import APIRouter, FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.core.database import get_db
from helpdesk.core.errors import register_exception_handlers
from helpdesk.core.permissions import (
    AuthorizationConfig,
    Guard,
    Permission,
    get_authorization_config,
)


pytestmark = pytest.mark.integration

router = APIRouter(prefix="/tickets")
calls: list[str] = []


@router.get("")
async def list_tickets(guard: Guard) -> dict:
    user = await guard.require(Permission.ISSUE_READ)
    calls.append("list")
    return {"user_id": str(user.id)}


@router.post("/{ticket_id}/transfer")
async def transfer_ticket(ticket_id: int, guard: Guard) -> dict:
    await guard.require(Permission.ISSUE_READ, Permission.ISSUE_TRANSFER)
    calls.append("transfer")
    return {"ticket_id": ticket_id}


@router.post("/sync")
async def sync_tickets(guard: Guard) -> dict:
    await guard.require("plugin::sync")
    calls.append("sync")
    return {"synced": True}


@pytest.fixture
def guarded_app(db: AsyncSession) -> FastAPI:
    """App that only mounts the guarded routes."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(router)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    calls.clear()
    return app


@pytest.fixture
async def guarded_client(guarded_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=guarded_app),
        base_url="http://test",
    ) as client:
        yield client


class TestPermissionGuard:
    """Tests for PermissionGuard.require."""

    async def test_anonymous_never_reaches_handler(self, guarded_client: AsyncClient):
        response = await guarded_client.get("/tickets")

        assert response.status_code == 401
        assert calls == []

    async def test_denied_never_reaches_handler(
        self, guarded_client: AsyncClient, user, auth_headers
    ):
        response = await guarded_client.get("/tickets", headers=auth_headers(user))

        assert response.status_code == 403
        assert calls == []

    async def test_allowed_returns_identity(
        self, guarded_client: AsyncClient, make_role, make_user, auth_headers
    ):
        agent = await make_user(await make_role("agent", ["issue::read"]))

        response = await guarded_client.get("/tickets", headers=auth_headers(agent))

        assert response.status_code == 200
        assert response.json() == {"user_id": str(agent.id)}
        assert calls == ["list"]

    async def test_every_permission_is_required(
        self, guarded_client: AsyncClient, make_role, make_user, auth_headers
    ):
        agent = await make_user(await make_role("agent", ["issue::read"]))

        response = await guarded_client.post(
            "/tickets/7/transfer", headers=auth_headers(agent)
        )

        assert response.status_code == 403
        assert calls == []

    async def test_permissions_may_come_from_several_roles(
        self, guarded_client: AsyncClient, make_role, make_user, auth_headers
    ):
        agent = await make_user(
            await make_role("reader", ["issue::read"]),
            await make_role("dispatcher", ["issue::transfer"]),
        )

        response = await guarded_client.post(
            "/tickets/7/transfer", headers=auth_headers(agent)
        )

        assert response.status_code == 200
        assert response.json() == {"ticket_id": 7}

    async def test_unlisted_permission_string(
        self, guarded_client: AsyncClient, make_role, make_user, auth_headers
    ):
        """Permissions outside the built-in vocabulary work the same way."""
        agent = await make_user(await make_role("syncer", ["plugin::sync"]))

        response = await guarded_client.post("/tickets/sync", headers=auth_headers(agent))

        assert response.status_code == 200

    async def test_overridden_config_disables_roles(
        self, guarded_app: FastAPI, guarded_client: AsyncClient, user, auth_headers
    ):
        """The switch can be substituted through dependency overrides."""
        guarded_app.dependency_overrides[get_authorization_config] = lambda: (
            AuthorizationConfig(id=1, roles_active=False)
        )

        response = await guarded_client.post(
            "/tickets/7/transfer", headers=auth_headers(user)
        )

        assert response.status_code == 200
        assert calls == ["transfer"]
