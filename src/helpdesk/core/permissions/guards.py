"""Route-level permission enforcement.

Handlers call the guard explicitly as their first statement:

    @router.delete("/{role_id}")
    async def delete_role(role_id: UUID, guard: Guard, service: RoleSvc):
        await guard.require(Permission.ROLE_DELETE)
        ...

Nothing runs past ``require`` unless the checker allowed the call.
"""

from typing import TYPE_CHECKING, Annotated, cast

from fastapi import Depends

from helpdesk.core.auth.dependencies import OptionalIdentity
from helpdesk.core.errors import ForbiddenError, UnauthorizedError
from helpdesk.core.permissions.checker import AuthorizationDecision, Checker


if TYPE_CHECKING:
    from helpdesk.modules.users.models import User


class PermissionGuard:
    """Binds the caller's identity to the permission checker."""

    def __init__(self, identity: OptionalIdentity, checker: Checker) -> None:
        self.identity = identity
        self.checker = checker

    async def require(self, *permissions: str) -> "User":
        """Require every given permission, or none for identity only.

        Returns:
            The authorized user

        Raises:
            UnauthorizedError: If no caller identity is available
            ForbiddenError: If the caller lacks a required permission
        """
        decision = await self.checker.authorize(self.identity, permissions)
        if decision.allowed:
            return cast("User", self.identity)

        if decision is AuthorizationDecision.AUTHENTICATION_REQUIRED:
            raise UnauthorizedError(
                "Authentication required",
                error_code="authentication_required",
            )
        raise ForbiddenError(
            "You do not have permission to perform this action",
            error_code="permission_denied",
        )


# Type alias for dependency injection
Guard = Annotated[PermissionGuard, Depends(PermissionGuard)]
