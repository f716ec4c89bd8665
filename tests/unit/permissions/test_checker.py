"""Unit tests for the authorization decision engine.

The resolver is mocked so that these tests only cover the order of the
decision rules and the superset comparison.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from helpdesk.core.permissions.checker import AuthorizationDecision, PermissionChecker
from helpdesk.core.permissions.models import AuthorizationConfig
from helpdesk.core.permissions.vocabulary import Permission


pytestmark = pytest.mark.unit


def make_checker(
    effective: set[str] | None = None,
    roles_active: bool = True,
) -> tuple[PermissionChecker, AsyncMock]:
    resolver = MagicMock()
    resolver.resolve_effective_permissions = AsyncMock(return_value=effective or set())
    config = AuthorizationConfig(id=1, roles_active=roles_active)
    return PermissionChecker(resolver, config), resolver.resolve_effective_permissions


@pytest.fixture
def identity() -> MagicMock:
    """A caller with an id."""
    user = MagicMock()
    user.id = uuid4()
    return user


class TestAuthorize:
    """Tests for PermissionChecker.authorize."""

    async def test_no_identity_requires_authentication(self):
        """Without an identity nothing else is consulted."""
        checker, resolve = make_checker({"role::read"})

        decision = await checker.authorize(None, [Permission.ROLE_READ])

        assert decision is AuthorizationDecision.AUTHENTICATION_REQUIRED
        resolve.assert_not_called()

    async def test_no_identity_with_empty_requirement(self):
        """Even an empty requirement needs an identity."""
        checker, _ = make_checker()

        decision = await checker.authorize(None, [])

        assert decision is AuthorizationDecision.AUTHENTICATION_REQUIRED

    async def test_empty_requirement_allows_any_identity(self, identity):
        checker, resolve = make_checker()

        decision = await checker.authorize(identity, [])

        assert decision is AuthorizationDecision.ALLOWED
        resolve.assert_not_called()

    async def test_roles_inactive_allows_any_identity(self, identity):
        """With roles switched off, permissions are not evaluated."""
        checker, resolve = make_checker(roles_active=False)

        decision = await checker.authorize(identity, [Permission.ROLE_DELETE])

        assert decision is AuthorizationDecision.ALLOWED
        resolve.assert_not_called()

    async def test_roles_inactive_still_requires_identity(self):
        checker, _ = make_checker(roles_active=False)

        decision = await checker.authorize(None, [Permission.ROLE_DELETE])

        assert decision is AuthorizationDecision.AUTHENTICATION_REQUIRED

    async def test_held_permission_is_allowed(self, identity):
        checker, resolve = make_checker({"role::read", "issue::read"})

        decision = await checker.authorize(identity, [Permission.ROLE_READ])

        assert decision is AuthorizationDecision.ALLOWED
        resolve.assert_awaited_once_with(identity.id)

    async def test_missing_permission_is_denied(self, identity):
        checker, _ = make_checker({"role::read"})

        decision = await checker.authorize(identity, [Permission.ROLE_UPDATE])

        assert decision is AuthorizationDecision.DENIED

    async def test_all_required_permissions_must_be_held(self, identity):
        """Requirements combine with AND, not OR."""
        checker, _ = make_checker({"role::read"})

        decision = await checker.authorize(
            identity, [Permission.ROLE_READ, Permission.ROLE_UPDATE]
        )

        assert decision is AuthorizationDecision.DENIED

    async def test_superset_is_allowed(self, identity):
        checker, _ = make_checker({"role::read", "role::update", "kb::read"})

        decision = await checker.authorize(
            identity, [Permission.ROLE_READ, Permission.ROLE_UPDATE]
        )

        assert decision is AuthorizationDecision.ALLOWED

    async def test_no_implied_permissions(self, identity):
        """Holding update does not grant read."""
        checker, _ = make_checker({"role::update"})

        decision = await checker.authorize(identity, [Permission.ROLE_READ])

        assert decision is AuthorizationDecision.DENIED

    async def test_plain_strings_are_accepted(self, identity):
        checker, _ = make_checker({"plugin::sync"})

        decision = await checker.authorize(identity, ["plugin::sync"])

        assert decision.allowed

    async def test_user_without_permissions_is_denied(self, identity):
        checker, _ = make_checker(set())

        decision = await checker.authorize(identity, [Permission.ISSUE_READ])

        assert decision is AuthorizationDecision.DENIED
        assert not decision.allowed
