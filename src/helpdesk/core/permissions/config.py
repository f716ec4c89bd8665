"""Loading of the authorization switch.

The switch is read once per request and handed to the permission
checker, so nothing in the decision path consults global state. Tests
substitute it through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import select

from helpdesk.api.dependencies import DBSession
from helpdesk.config import settings
from helpdesk.core.constants import AUTHORIZATION_CONFIG_ID
from helpdesk.core.permissions.models import AuthorizationConfig


async def get_authorization_config(db: DBSession) -> AuthorizationConfig:
    """Load the authorization switch from the store.

    Falls back to an unsaved instance built from ``settings.roles_active``
    when the row does not exist yet.
    """
    stmt = select(AuthorizationConfig).where(
        AuthorizationConfig.id == AUTHORIZATION_CONFIG_ID
    )
    config = await db.scalar(stmt)
    if config is None:
        return AuthorizationConfig(
            id=AUTHORIZATION_CONFIG_ID,
            roles_active=settings.roles_active,
        )
    return config


# Type alias for dependency injection
ActiveConfig = Annotated[AuthorizationConfig, Depends(get_authorization_config)]
