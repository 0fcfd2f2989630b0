"""Exception handlers producing the standard JSON envelope.

The gateway router converts exceptions itself; these handlers are the
backstop for anything that escapes to the FastAPI host.
"""

from typing import TYPE_CHECKING, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lightlog.core.errors.exceptions import AppException
from lightlog.core.http.responses import error


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


def exception_to_response(exc: Exception, path: str) -> JSONResponse:
    """Convert any exception into an error envelope response.

    ``AppException`` subclasses keep their status and message; anything else
    becomes a 500 carrying the exception's message.

    Args:
        exc: The raised exception
        path: Request path, for the log record

    Returns:
        The error envelope response
    """
    if isinstance(exc, AppException):
        logger.warning(
            "app_exception",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=path,
        )
        return error(exc.message, exc.status_code, exc.errors)

    logger.exception(
        "unhandled_exception",
        path=path,
        error_type=type(exc).__name__,
    )
    return error(
        str(exc) or "Internal Server Error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions."""
    return exception_to_response(exc, request.url.path)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render Starlette HTTP errors (404/405 from the host) as envelopes."""
    logger.info(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
    )
    return error(str(exc.detail), exc.status_code)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return exception_to_response(exc, request.url.path)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Call this function during app initialization:

        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        StarletteHTTPException, cast("ExceptionHandler", http_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
