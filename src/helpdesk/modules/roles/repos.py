"""Role repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from helpdesk.api.dependencies import DBSession
from helpdesk.core.permissions.models import Role


class RoleRepository:
    """Repository for Role database operations.

    Role names are unique in the store (``uq_role_name``); ``create``
    and ``update`` let the resulting ``IntegrityError`` propagate.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def get_by_id(self, role_id: UUID, with_users: bool = False) -> Role | None:
        """Get a role by ID.

        Args:
            role_id: The role's UUID
            with_users: Also load the role's members

        Returns:
            Role if found, None otherwise
        """
        stmt = select(Role).where(Role.id == role_id)
        if with_users:
            stmt = stmt.options(selectinload(Role.users))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Role | None:
        """Get a role by its exact name."""
        result = await self.session.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Role]:
        """List every role ordered by name."""
        result = await self.session.execute(select(Role).order_by(Role.name))
        return list(result.scalars().all())

    async def count_defaults(self) -> int:
        """Count roles flagged as default."""
        stmt = select(func.count()).select_from(Role).where(Role.is_default.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def create(self, role: Role) -> Role:
        """Insert a new role.

        Args:
            role: Role instance to create

        Returns:
            The created role with ID and timestamps populated
        """
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role, attribute_names=["created_at", "updated_at"])
        return role

    async def update(self, role: Role) -> Role:
        """Flush pending changes to a role and its membership.

        Args:
            role: Role instance with updated fields

        Returns:
            The updated role
        """
        await self.session.flush()
        return role

    async def delete(self, role: Role) -> None:
        """Delete a role.

        Args:
            role: Role instance to delete
        """
        await self.session.delete(role)
        await self.session.flush()


# Type alias for dependency injection
RoleRepo = Annotated[RoleRepository, Depends(RoleRepository)]
