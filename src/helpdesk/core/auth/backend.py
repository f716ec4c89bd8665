"""JWT handling for the current-identity provider.

Sessions are issued by the login service; this module only reads the
bearer tokens it produces.
"""

from datetime import UTC, datetime
from uuid import UUID

from jose import JWTError, jwt

from helpdesk.config import settings
from helpdesk.core.auth.schemas import TokenData


def decode_token(token: str) -> TokenData | None:
    """Decode and validate a JWT token.

    Args:
        token: The JWT token to decode

    Returns:
        TokenData if valid, None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )

        user_id = payload.get("sub")
        exp = payload.get("exp")

        if not user_id or exp is None:
            return None

        return TokenData(
            user_id=UUID(user_id),
            exp=datetime.fromtimestamp(exp, tz=UTC),
            type=payload.get("type", "access"),
            jti=payload.get("jti"),
        )

    except (JWTError, ValueError):
        return None
