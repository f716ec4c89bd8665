"""User API routes.

Only self-service reads live here; account management belongs to the
account service.
"""

from helpdesk.core.permissions import ActiveConfig, Guard, Resolver
from helpdesk.modules.users import router
from helpdesk.modules.users.schemas import (
    EffectivePermissionsResponse,
    UserWithRolesResponse,
)


@router.get(
    "/me",
    response_model=UserWithRolesResponse,
    summary="Get current user",
    description="Returns the authenticated user with the roles they hold.",
)
async def get_me(guard: Guard) -> UserWithRolesResponse:
    """Get current user profile."""
    user = await guard.require()
    return UserWithRolesResponse.model_validate(user)


@router.get(
    "/me/permissions",
    response_model=EffectivePermissionsResponse,
    summary="Get current user's permissions",
    description=(
        "Returns the effective permissions of the authenticated user, "
        "including default-role permissions when no role is assigned."
    ),
)
async def get_my_permissions(
    guard: Guard,
    resolver: Resolver,
    config: ActiveConfig,
) -> EffectivePermissionsResponse:
    """Resolve the caller's effective permissions."""
    user = await guard.require()
    permissions = await resolver.resolve_effective_permissions(user.id)
    return EffectivePermissionsResponse(
        user_id=user.id,
        permissions=sorted(permissions),
        roles_active=config.roles_active,
    )
