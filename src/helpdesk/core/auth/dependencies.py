"""FastAPI dependencies for the current caller identity.

The identity is resolved from a bearer token. An absent or invalid
token yields ``None`` rather than an error: whether that is acceptable
is decided by the permission guard, which reports it as an
authentication failure distinct from a permission denial.
"""

from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from helpdesk.api.dependencies import DBSession
from helpdesk.core.auth.backend import decode_token


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: DBSession,
) -> Any | None:  # Returns User, but use Any to avoid circular import
    """Get the calling user if a valid session exists, None otherwise.

    Args:
        credentials: Optional bearer token credentials
        db: Database session

    Returns:
        The active user the token belongs to, or None
    """
    if not credentials:
        return None

    token_data = decode_token(credentials.credentials)
    if not token_data or token_data.type != "access":
        return None

    from helpdesk.modules.users.repos import UserRepository  # noqa: PLC0415

    repo = UserRepository(db)
    user = await repo.get_by_id(token_data.user_id)

    if not user or not user.is_active:
        return None

    return user


# Type alias for dependency injection
OptionalIdentity = Annotated[Any | None, Depends(get_current_identity)]
