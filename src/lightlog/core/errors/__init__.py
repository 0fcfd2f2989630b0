"""Error handling module with the standard JSON envelope."""

from lightlog.core.errors.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from lightlog.core.errors.handlers import (
    exception_to_response,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "BadRequestError",
    "ConflictError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    # Handlers
    "exception_to_response",
    "register_exception_handlers",
]
