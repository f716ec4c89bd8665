"""Current-identity provider: bearer token decoding and user lookup."""

from helpdesk.core.auth.backend import decode_token
from helpdesk.core.auth.dependencies import (
    OptionalIdentity,
    get_current_identity,
)
from helpdesk.core.auth.middleware import IdentityContextMiddleware, RequestIdMiddleware
from helpdesk.core.auth.schemas import TokenData


__all__ = [
    # Middleware
    "IdentityContextMiddleware",
    # Dependencies
    "OptionalIdentity",
    "RequestIdMiddleware",
    # Schemas
    "TokenData",
    # Token utilities
    "decode_token",
    "get_current_identity",
]
