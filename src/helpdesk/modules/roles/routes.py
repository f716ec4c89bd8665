"""Role administration API routes.

Every handler checks its permission first, before any read or write.
Removing a role from a user is gated by ``role::update``, the same
permission as assigning one.
"""

from fastapi import status

from helpdesk.core.permissions import ActiveConfig, Guard, Permission
from helpdesk.modules.roles import router
from helpdesk.modules.roles.schemas import (
    RoleAssignment,
    RoleCreate,
    RoleDetailResponse,
    RoleListResponse,
    RoleResponse,
    RoleUpdate,
)
from helpdesk.modules.roles.services import RoleSvc
from helpdesk.modules.users.schemas import UserWithRolesResponse


@router.get(
    "",
    response_model=RoleListResponse,
    summary="List roles",
    description="List every role together with whether roles are enforced.",
)
async def list_roles(
    guard: Guard,
    service: RoleSvc,
    config: ActiveConfig,
) -> RoleListResponse:
    """List roles."""
    await guard.require(Permission.ROLE_READ)
    roles = await service.list_roles()
    return RoleListResponse(
        items=[RoleResponse.model_validate(r) for r in roles],
        roles_active=config.roles_active,
    )


@router.post(
    "",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create role",
    description="Create a role. Fails with 400 if the name is taken.",
)
async def create_role(
    data: RoleCreate,
    guard: Guard,
    service: RoleSvc,
) -> RoleResponse:
    """Create a role."""
    await guard.require(Permission.ROLE_CREATE)
    role = await service.create_role(data)
    return RoleResponse.model_validate(role)


@router.post(
    "/assign",
    response_model=UserWithRolesResponse,
    summary="Assign role to user",
    description="Link a user to a role. Assigning a held role is a no-op.",
)
async def assign_role(
    data: RoleAssignment,
    guard: Guard,
    service: RoleSvc,
) -> UserWithRolesResponse:
    """Assign a role to a user."""
    await guard.require(Permission.ROLE_UPDATE)
    user = await service.assign_role(data.user_id, data.role_id)
    return UserWithRolesResponse.model_validate(user)


@router.post(
    "/remove",
    response_model=UserWithRolesResponse,
    summary="Remove role from user",
    description="Unlink a user from a role. Removing an unheld role is a no-op.",
)
async def remove_role(
    data: RoleAssignment,
    guard: Guard,
    service: RoleSvc,
) -> UserWithRolesResponse:
    """Remove a role from a user."""
    await guard.require(Permission.ROLE_UPDATE)
    user = await service.remove_role(data.user_id, data.role_id)
    return UserWithRolesResponse.model_validate(user)


@router.get(
    "/{role_id}",
    response_model=RoleDetailResponse,
    summary="Get role by ID",
    description="Get a role including its members.",
)
async def get_role(
    role_id: str,
    guard: Guard,
    service: RoleSvc,
) -> RoleDetailResponse:
    """Get a role by ID."""
    await guard.require(Permission.ROLE_READ)
    role = await service.get_role(role_id)
    return RoleDetailResponse.model_validate(role)


@router.put(
    "/{role_id}",
    response_model=RoleDetailResponse,
    summary="Update role",
    description=(
        "Replace the supplied fields of a role. A supplied `users` list "
        "replaces the role's whole membership."
    ),
)
async def update_role(
    role_id: str,
    data: RoleUpdate,
    guard: Guard,
    service: RoleSvc,
) -> RoleDetailResponse:
    """Update a role."""
    await guard.require(Permission.ROLE_UPDATE)
    role = await service.update_role(role_id, data)
    return RoleDetailResponse.model_validate(role)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete role",
    description="Delete a role and unlink it from every user.",
)
async def delete_role(
    role_id: str,
    guard: Guard,
    service: RoleSvc,
) -> None:
    """Delete a role."""
    await guard.require(Permission.ROLE_DELETE)
    await service.delete_role(role_id)
