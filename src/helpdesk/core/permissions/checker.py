"""Authorization decision engine.

``PermissionChecker.authorize`` is the single place where a request is
judged. It returns a decision instead of raising so that it can be used
from any layer; ``PermissionGuard`` turns the decision into an HTTP
error at the route boundary.
"""

from collections.abc import Iterable
from enum import StrEnum
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from helpdesk.core.permissions.config import ActiveConfig
from helpdesk.core.permissions.models import AuthorizationConfig
from helpdesk.core.permissions.resolver import MembershipResolver, Resolver


if TYPE_CHECKING:
    from helpdesk.modules.users.models import User


class AuthorizationDecision(StrEnum):
    """Outcome of an authorization check."""

    ALLOWED = "allowed"
    DENIED = "denied"
    AUTHENTICATION_REQUIRED = "authentication_required"

    @property
    def allowed(self) -> bool:
        return self is AuthorizationDecision.ALLOWED


class PermissionChecker:
    """Decides whether a caller may proceed.

    The checker holds no mutable state. Its only side effect is reading
    role membership through the resolver; it never writes or logs.
    """

    def __init__(
        self,
        resolver: MembershipResolver,
        config: AuthorizationConfig,
    ) -> None:
        self.resolver = resolver
        self.config = config

    async def authorize(
        self,
        identity: "User | None",
        required: Iterable[str],
    ) -> AuthorizationDecision:
        """Check a caller against a set of required permissions.

        All required permissions must be held. An empty requirement only
        needs an identity, and so does every check while roles are
        switched off.

        Args:
            identity: The calling user, or None when no session exists
            required: Permission strings the route requires

        Returns:
            The authorization decision
        """
        if identity is None:
            return AuthorizationDecision.AUTHENTICATION_REQUIRED

        needed = {str(permission) for permission in required}
        if not needed or not self.config.roles_active:
            return AuthorizationDecision.ALLOWED

        effective = await self.resolver.resolve_effective_permissions(identity.id)
        if needed <= effective:
            return AuthorizationDecision.ALLOWED
        return AuthorizationDecision.DENIED


def get_permission_checker(resolver: Resolver, config: ActiveConfig) -> PermissionChecker:
    """Build the checker for the current request."""
    return PermissionChecker(resolver, config)


# Type alias for dependency injection
Checker = Annotated[PermissionChecker, Depends(get_permission_checker)]
