"""Permission system database models.

This module defines the RBAC (Role-Based Access Control) models:
- Role: a named set of permission strings
- user_roles: link table between users and roles
- AuthorizationConfig: single-row switch for role enforcement
"""

from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    Table,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk.core.constants import (
    AUTHORIZATION_CONFIG_ID,
    MAX_DESCRIPTION_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from helpdesk.core.database.base import Base, TimestampMixin, UUIDMixin


if TYPE_CHECKING:
    from helpdesk.modules.users.models import User


# Junction table for User <-> Role many-to-many relationship.
# The composite primary key keeps a (user, role) pair linked at most once.
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Uuid,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Role(Base, UUIDMixin, TimestampMixin):
    """Role model representing a named set of permissions.

    Attributes:
        name: Unique role name (e.g., "admin", "support")
        description: Human-readable description of the role
        permissions: Permission strings granted by this role
        is_default: Whether the role applies to users holding no role
    """

    __tablename__ = "roles"
    __table_args__ = (UniqueConstraint("name", name="uq_role_name"),)

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )
    permissions: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    is_default: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
    )

    # Relationships
    users: Mapped[list["User"]] = relationship(
        "User",
        secondary=user_roles,
        back_populates="roles",
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name}, is_default={self.is_default})>"


class AuthorizationConfig(Base):
    """Process-wide authorization switch.

    Exactly one row (``id = 1``) is expected. When ``roles_active`` is
    false, any identified caller passes permission checks.
    """

    __tablename__ = "authorization_config"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        default=AUTHORIZATION_CONFIG_ID,
    )
    roles_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<AuthorizationConfig(roles_active={self.roles_active})>"
