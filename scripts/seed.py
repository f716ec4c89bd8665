#!/usr/bin/env python
"""
Create the built-in roles and the authorization switch.

Running the script twice is safe: existing rows are left untouched.
"""

import argparse
import asyncio
import sys

from sqlalchemy import select


# Add src to path for imports
sys.path.insert(0, "src")

from helpdesk.core.constants import AUTHORIZATION_CONFIG_ID
from helpdesk.core.database import Base, async_engine, async_session_factory
from helpdesk.core.permissions import (
    AuthorizationConfig,
    Permission,
    Role,
    normalize_permissions,
)
from helpdesk.modules.users.models import User


BUILTIN_ROLES = [
    {
        "name": "admin",
        "description": "Full access to every helpdesk resource",
        "permissions": normalize_permissions(Permission),
        "is_default": False,
    },
    {
        "name": "support",
        "description": "Applied to agents without an explicit role",
        "permissions": normalize_permissions(
            [
                Permission.ISSUE_CREATE,
                Permission.ISSUE_READ,
                Permission.ISSUE_UPDATE,
                Permission.ISSUE_COMMENT,
                Permission.CLIENT_READ,
                Permission.KB_READ,
                Permission.TIME_ENTRY_CREATE,
                Permission.TIME_ENTRY_READ,
            ]
        ),
        "is_default": True,
    },
]


async def create_tables() -> None:
    """Create any missing tables."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Tables created")


async def seed_default(roles_active: bool) -> None:
    """Create the built-in roles and the authorization switch."""
    async with async_session_factory() as session:
        for data in BUILTIN_ROLES:
            result = await session.execute(select(Role).where(Role.name == data["name"]))
            if result.scalar_one_or_none():
                print(f"Role already exists: {data['name']}")
                continue

            session.add(Role(**data))
            print(f"Created role: {data['name']}")

        config = await session.get(AuthorizationConfig, AUTHORIZATION_CONFIG_ID)
        if config is None:
            session.add(
                AuthorizationConfig(id=AUTHORIZATION_CONFIG_ID, roles_active=roles_active)
            )
            print(f"Created authorization config (roles_active={roles_active})")

        await session.commit()


async def grant_admin(email: str) -> None:
    """Assign the admin role to an existing user."""
    async with async_session_factory() as session:
        user = (
            await session.execute(select(User).where(User.email == email))
        ).scalar_one_or_none()
        role = (
            await session.execute(select(Role).where(Role.name == "admin"))
        ).scalar_one_or_none()

        if user is None or role is None:
            print(f"User {email} or admin role not found")
            sys.exit(1)

        if role not in user.roles:
            user.roles.append(role)
            await session.commit()
        print(f"{email} is an admin")


async def main(args: argparse.Namespace) -> None:
    """Run the seeding steps requested on the command line."""
    if args.create_tables:
        await create_tables()
    await seed_default(roles_active=not args.roles_inactive)
    if args.admin_email:
        await grant_admin(args.admin_email)
    await async_engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed roles and authorization config")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding",
    )
    parser.add_argument(
        "--roles-inactive",
        action="store_true",
        help="Seed the authorization switch with enforcement turned off",
    )
    parser.add_argument(
        "--admin-email",
        help="Email of an existing user to grant the admin role",
    )

    asyncio.run(main(parser.parse_args()))
