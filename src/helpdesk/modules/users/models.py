"""User database models."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from helpdesk.core.database.base import Base, TimestampMixin, UUIDMixin


if TYPE_CHECKING:
    from helpdesk.core.permissions.models import Role


class User(Base, UUIDMixin, TimestampMixin):
    """Helpdesk agent account.

    Accounts are created and removed by the account service; the
    authorization core only reads them and edits ``roles``.

    Attributes:
        email: Unique email address
        full_name: User's full name
        is_active: Whether the user can authenticate
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    # Relationships
    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary="user_roles",
        back_populates="users",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
