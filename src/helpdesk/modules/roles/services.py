"""Role administration business logic."""

from datetime import UTC, datetime
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from helpdesk.core.errors import DuplicateNameError, NotFoundError
from helpdesk.core.permissions.models import Role
from helpdesk.modules.roles.repos import RoleRepo
from helpdesk.modules.roles.schemas import RoleCreate, RoleUpdate
from helpdesk.modules.users.models import User
from helpdesk.modules.users.repos import UserRepo


logger = structlog.get_logger()

# Columns that may not be cleared by sending an explicit null
_REQUIRED_FIELDS = frozenset({"name", "permissions", "is_default", "users"})


def _duplicate_name(name: str) -> DuplicateNameError:
    return DuplicateNameError("Role already exists", details={"name": name})


def _as_uuid(value: UUID | str) -> UUID | None:
    """Parse an id, or return None when it cannot name any stored row."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except ValueError:
        return None


class RoleService:
    """Service for role definitions and role membership.

    Permission checks happen before these methods are called; the
    service only enforces data rules.
    """

    def __init__(self, repo: RoleRepo, users: UserRepo) -> None:
        self.repo = repo
        self.users = users

    async def list_roles(self) -> list[Role]:
        """List every role, without members."""
        return await self.repo.list_all()

    async def get_role(self, role_id: UUID | str) -> Role:
        """Get a role with its members.

        Raises:
            NotFoundError: If the role does not exist
        """
        parsed = _as_uuid(role_id)
        role = await self.repo.get_by_id(parsed, with_users=True) if parsed else None
        if not role:
            raise NotFoundError(
                "Role not found",
                resource="role",
                resource_id=str(role_id),
            )
        return role

    async def create_role(self, data: RoleCreate) -> Role:
        """Create a new role.

        Args:
            data: Role creation data

        Returns:
            The created role

        Raises:
            DuplicateNameError: If a role with this name already exists
        """
        if await self.repo.get_by_name(data.name):
            raise _duplicate_name(data.name)

        role = Role(
            name=data.name,
            description=data.description,
            permissions=data.permissions,
            is_default=data.is_default,
        )
        try:
            role = await self.repo.create(role)
        except IntegrityError as exc:
            # A concurrent create won the unique constraint
            raise _duplicate_name(data.name) from exc

        logger.info("role_created", role_id=str(role.id), name=role.name)
        if role.is_default:
            await self._check_default_roles()
        return role

    async def update_role(self, role_id: UUID | str, data: RoleUpdate) -> Role:
        """Replace the supplied fields of a role.

        Every check runs before the role is touched, so a failed update
        leaves the role unchanged.

        Args:
            role_id: The role's UUID
            data: Fields to replace; ``users`` replaces the membership

        Returns:
            The updated role with its members

        Raises:
            NotFoundError: If the role or any listed user does not exist
            DuplicateNameError: If the new name belongs to another role
        """
        role = await self.get_role(role_id)
        fields: dict[str, Any] = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in _REQUIRED_FIELDS
        }

        new_name = fields.get("name")
        if new_name and new_name != role.name and await self.repo.get_by_name(new_name):
            raise _duplicate_name(new_name)

        members: list[User] | None = None
        if "users" in fields:
            members = await self._get_users(fields.pop("users"))

        for key, value in fields.items():
            setattr(role, key, value)
        if members is not None:
            role.users = members
        role.updated_at = datetime.now(UTC)

        try:
            role = await self.repo.update(role)
        except IntegrityError as exc:
            raise _duplicate_name(role.name) from exc

        logger.info(
            "role_updated",
            role_id=str(role.id),
            fields=sorted(fields) + (["users"] if members is not None else []),
        )
        if role.is_default:
            await self._check_default_roles()
        return role

    async def delete_role(self, role_id: UUID | str) -> None:
        """Delete a role and every membership link to it.

        Raises:
            NotFoundError: If the role does not exist
        """
        role = await self.get_role(role_id)
        name, former_members = role.name, len(role.users)

        # Emptying the collection also drops the role from loaded users
        role.users = []
        await self.repo.delete(role)

        logger.info(
            "role_deleted",
            role_id=str(role_id),
            name=name,
            former_members=former_members,
        )

    async def assign_role(self, user_id: UUID | str, role_id: UUID | str) -> User:
        """Link a user to a role. Linking an existing pair is a no-op.

        Raises:
            NotFoundError: If the user or the role does not exist
        """
        user, role = await self._get_pair(user_id, role_id)

        if role not in user.roles:
            user.roles.append(role)
            user = await self.users.update(user)
            logger.info("role_assigned", user_id=str(user_id), role_id=str(role_id))

        return user

    async def remove_role(self, user_id: UUID | str, role_id: UUID | str) -> User:
        """Unlink a user from a role. Unlinking a missing pair is a no-op.

        Raises:
            NotFoundError: If the user or the role does not exist
        """
        user, role = await self._get_pair(user_id, role_id)

        if role in user.roles:
            user.roles.remove(role)
            user = await self.users.update(user)
            logger.info("role_removed", user_id=str(user_id), role_id=str(role_id))

        return user

    async def _get_pair(
        self, user_id: UUID | str, role_id: UUID | str
    ) -> tuple[User, Role]:
        parsed_user, parsed_role = _as_uuid(user_id), _as_uuid(role_id)
        user = await self.users.get_by_id(parsed_user) if parsed_user else None
        role = await self.repo.get_by_id(parsed_role) if parsed_role else None
        if not user or not role:
            raise NotFoundError(
                "User or role not found",
                details={"user_id": str(user_id), "role_id": str(role_id)},
            )
        return user, role

    async def _get_users(self, user_ids: list[UUID | str]) -> list[User]:
        parsed = {raw: _as_uuid(raw) for raw in user_ids}
        wanted = {user_id for user_id in parsed.values() if user_id}
        users = await self.users.get_many(wanted)
        found = {user.id for user in users}
        missing = sorted(str(raw) for raw, user_id in parsed.items() if user_id not in found)
        if missing:
            raise NotFoundError(
                "User not found",
                resource="user",
                resource_id=missing[0],
            )
        return users

    async def _check_default_roles(self) -> None:
        """Warn when more than one role is flagged default.

        Users without a role then receive the union of all of them.
        """
        count = await self.repo.count_defaults()
        if count > 1:
            logger.warning("multiple_default_roles", count=count)


# Type alias for dependency injection
RoleSvc = Annotated[RoleService, Depends(RoleService)]
