"""Effective permission resolution.

A user's effective permissions are the union of the permissions of
every role they hold. A user holding no role at all receives the union
of every role flagged ``is_default`` instead. Default roles are never
added on top of explicit assignments.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from helpdesk.api.dependencies import DBSession
from helpdesk.core.permissions.models import Role, user_roles


class MembershipResolver:
    """Read-only view over role membership.

    Queries always go to the store rather than to loaded relationship
    collections, so the result reflects every flushed change made
    earlier in the same request.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def get_user_roles(self, user_id: UUID) -> list[Role]:
        """Get all roles explicitly assigned to a user.

        Args:
            user_id: The user's UUID

        Returns:
            List of roles assigned to the user
        """
        stmt = (
            select(Role)
            .join(user_roles, user_roles.c.role_id == Role.id)
            .where(user_roles.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_default_roles(self) -> list[Role]:
        """Get every role flagged as default."""
        stmt = select(Role).where(Role.is_default.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def resolve_effective_permissions(self, user_id: UUID) -> set[str]:
        """Compute the permission strings a user currently holds.

        Args:
            user_id: The user's UUID

        Returns:
            Set of permission strings. Empty for unknown users and for
            users with no role when no default role exists.
        """
        from helpdesk.modules.users.models import User  # noqa: PLC0415

        exists = await self.session.scalar(select(User.id).where(User.id == user_id))
        if exists is None:
            return set()

        roles = await self.get_user_roles(user_id)
        if not roles:
            roles = await self.get_default_roles()

        return {permission for role in roles for permission in role.permissions}


# Type alias for dependency injection
Resolver = Annotated[MembershipResolver, Depends(MembershipResolver)]
