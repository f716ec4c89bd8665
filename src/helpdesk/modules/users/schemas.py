"""Pydantic schemas for user responses."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Schema for user response data."""

    id: UUID
    email: str
    full_name: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class UserRoleSummary(BaseModel):
    """A role as listed on a user."""

    id: UUID
    name: str
    permissions: list[str]
    is_default: bool

    model_config = ConfigDict(from_attributes=True)


class UserWithRolesResponse(UserResponse):
    """Schema for a user together with the roles they hold."""

    roles: list[UserRoleSummary]


class EffectivePermissionsResponse(BaseModel):
    """Schema for a user's resolved permissions."""

    user_id: UUID
    permissions: list[str]
    roles_active: bool
