"""Standard JSON envelope responses.

Success: ``{"success": true, "message": ..., "data": ...}``
Error:   ``{"success": false, "message": ..., "errors": [...]}`` (``errors``
omitted when empty)
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from starlette import status
from starlette.responses import JSONResponse, Response


def json_response(
    content: Any, status_code: int = status.HTTP_200_OK
) -> JSONResponse:
    """Build a JSON response from arbitrary content.

    Content goes through ``jsonable_encoder`` so UUIDs, datetimes and
    pydantic models serialize without extra work at the call site.
    """
    return JSONResponse(content=jsonable_encoder(content), status_code=status_code)


def success(
    data: Any = None,
    message: str = "Success",
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Build a success envelope.

    Args:
        data: Payload placed under ``data`` (defaults to an empty object)
        message: Human-readable message
        status_code: HTTP status code

    Returns:
        The JSON response
    """
    return json_response(
        {
            "success": True,
            "message": message,
            "data": {} if data is None else data,
        },
        status_code,
    )


def created(data: Any = None, message: str = "Created") -> JSONResponse:
    """Build a 201 success envelope."""
    return success(data, message, status.HTTP_201_CREATED)


def error(
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    errors: list[Any] | None = None,
) -> JSONResponse:
    """Build an error envelope.

    Args:
        message: Human-readable message
        status_code: HTTP status code
        errors: Optional itemized errors

    Returns:
        The JSON response
    """
    content: dict[str, Any] = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return json_response(content, status_code)


def no_content() -> Response:
    """Build an empty 204 response."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)
