"""Domain exceptions for the application.

These exceptions represent business-logic errors and are converted to the
standard JSON envelope (``{"success": false, "message", "errors"?}``) by the
gateway router and by the host's exception handlers.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code, used in logs
        status_code: HTTP status code for the response
        errors: Optional itemized errors returned to the client
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        errors: list[Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.errors = errors or []
        super().__init__(self.message)


class BadRequestError(AppException):
    """Raised for general client errors.

    Example:
        raise BadRequestError("Invalid JSON body")
    """

    message = "Bad request"
    error_code = "bad_request"
    status_code = 400


class UnauthorizedError(AppException):
    """Raised when authentication is required but not provided or invalid.

    Example:
        raise UnauthorizedError("Invalid or expired token")
    """

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("Project not found")
    """

    message = "Not Found"
    error_code = "not_found"
    status_code = 404


class ConflictError(AppException):
    """Raised when there's a conflict with existing data.

    Example:
        raise ConflictError("Username already taken")
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class ValidationError(AppException):
    """Raised when submitted data fails validation.

    Example:
        raise ValidationError(
            "Invalid schema definition",
            errors=[{"field": "fields[0].name", "error": "Field required"}],
            status_code=400,
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[Any] | None = None,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message=message, errors=errors, **kwargs)
        if status_code is not None:
            self.status_code = status_code

