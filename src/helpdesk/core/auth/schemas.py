"""Authentication schemas for token handling."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class TokenData(BaseModel):
    """Data extracted from a JWT token.

    Attributes:
        user_id: The user's UUID
        exp: Token expiration time
        type: Token type
        jti: Unique token identifier
    """

    user_id: UUID
    exp: datetime
    type: str = "access"
    jti: str | None = None
