"""Error handling module with RFC 7807 Problem Details."""

from helpdesk.core.errors.exceptions import (
    AppException,
    BadRequestError,
    DuplicateNameError,
    ForbiddenError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
)
from helpdesk.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "BadRequestError",
    "DuplicateNameError",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "NotFoundError",
    "ProblemDetail",
    "StoreError",
    "UnauthorizedError",
    "register_exception_handlers",
]
