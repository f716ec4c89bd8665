"""Pydantic schemas for role operations."""

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from helpdesk.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_PERMISSION_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from helpdesk.core.permissions.vocabulary import normalize_permissions
from helpdesk.modules.users.schemas import UserResponse


PermissionString = Annotated[
    str, Field(min_length=1, max_length=MAX_PERMISSION_LENGTH)
]

# Ids are opaque to callers; ids that name no row are reported as not found
EntityId = str


def _clean_name(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Role name must not be blank")
    return value


# ============================================================
# Request Schemas
# ============================================================


class RoleCreate(BaseModel):
    """Schema for creating a role."""

    name: str = Field(..., min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    permissions: list[PermissionString] = Field(default_factory=list)
    is_default: bool = False

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Strip the name and reject whitespace-only values."""
        return _clean_name(v)  # type: ignore[return-value]

    @field_validator("permissions")
    @classmethod
    def collapse_permissions(cls, v: list[str]) -> list[str]:
        """Drop duplicate permission strings."""
        return normalize_permissions(v)


class RoleUpdate(BaseModel):
    """Schema for updating a role.

    Only fields present in the request are applied. ``users``, when
    present, replaces the full membership of the role; a single id is
    accepted as a one-element list.
    """

    name: str | None = Field(None, min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    permissions: list[PermissionString] | None = None
    is_default: bool | None = None
    users: list[EntityId] | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        """Strip the name and reject whitespace-only values."""
        return _clean_name(v)

    @field_validator("permissions")
    @classmethod
    def collapse_permissions(cls, v: list[str] | None) -> list[str] | None:
        """Drop duplicate permission strings."""
        return None if v is None else normalize_permissions(v)

    @field_validator("users", mode="before")
    @classmethod
    def wrap_single_user(cls, v: Any) -> Any:
        """Accept a bare user id in place of a list."""
        if isinstance(v, str | UUID):
            v = [v]
        if isinstance(v, list):
            return [str(item) if isinstance(item, UUID) else item for item in v]
        return v


class RoleAssignment(BaseModel):
    """Schema for linking or unlinking a user and a role."""

    user_id: EntityId
    role_id: EntityId

    @field_validator("user_id", "role_id", mode="before")
    @classmethod
    def stringify_uuid(cls, v: Any) -> Any:
        return str(v) if isinstance(v, UUID) else v


# ============================================================
# Response Schemas
# ============================================================


class RoleResponse(BaseModel):
    """Schema for role response data, without members."""

    id: UUID
    name: str
    description: str | None = None
    permissions: list[str]
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoleDetailResponse(RoleResponse):
    """Schema for a single role including its members."""

    users: list[UserResponse]


class RoleListResponse(BaseModel):
    """Schema for listing roles.

    ``roles_active`` tells callers whether the listed roles are
    currently enforced.
    """

    items: list[RoleResponse]
    roles_active: bool
