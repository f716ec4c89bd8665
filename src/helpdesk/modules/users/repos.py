"""User repository for database operations."""

from collections.abc import Collection
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from helpdesk.api.dependencies import DBSession
from helpdesk.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    Users are owned by the account service; only lookups and role
    membership updates happen here.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID, with roles loaded.

        Args:
            user_id: The user's UUID

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, user_ids: Collection[UUID]) -> list[User]:
        """Get every user whose ID is in ``user_ids``.

        Unknown IDs are silently skipped; callers compare lengths.
        """
        if not user_ids:
            return []
        stmt = select(User).where(User.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, user: User) -> User:
        """Flush pending changes to a user.

        Args:
            user: User instance with updated fields

        Returns:
            The updated user
        """
        await self.session.flush()
        return user


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
