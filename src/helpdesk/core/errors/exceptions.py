"""Domain exceptions for the application.

These exceptions represent business-logic errors and are converted to
RFC 7807 Problem Details responses by the exception handlers, so route
handlers never build error responses themselves.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a referenced role or user does not exist.

    Example:
        raise NotFoundError("Role not found", resource="role", resource_id=str(role_id))
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class UnauthorizedError(AppException):
    """Raised when no valid caller identity could be established.

    Example:
        raise UnauthorizedError("Invalid access token")
    """

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when an identified caller lacks the required permissions.

    The response never names the missing permission.
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class BadRequestError(AppException):
    """Raised for general client errors.

    Example:
        raise BadRequestError("Invalid request format")
    """

    message = "Bad request"
    error_code = "bad_request"
    status_code = 400


class DuplicateNameError(BadRequestError):
    """Raised when a role name is already taken.

    Example:
        raise DuplicateNameError("Role already exists", details={"name": name})
    """

    message = "Name already exists"
    error_code = "duplicate_name"


class StoreError(AppException):
    """Raised when the persistent store fails.

    The underlying driver error is logged but never sent to clients.
    """

    message = "An unexpected error occurred"
    error_code = "store_error"
    status_code = 500
