"""Helpers for reading gateway requests."""

import json
from collections.abc import Iterable
from typing import Any

from starlette.requests import Request


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


async def read_json(request: Request) -> Any | None:
    """Decode the request body as JSON.

    ``NaN`` and ``Infinity`` are not JSON and are rejected.

    Returns:
        The decoded value, or None if the body is empty or not valid JSON
    """
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        return None


def missing_fields(data: Any, required: Iterable[str]) -> list[str]:
    """List required keys that are absent, null, or empty strings.

    Args:
        data: Decoded request body
        required: Names of required keys

    Returns:
        The missing names, in the order given
    """
    if not isinstance(data, dict):
        return list(required)
    return [name for name in required if data.get(name) in (None, "")]


def get_client_ip(request: Request) -> str | None:
    """Extract the real client IP from a request.

    Handles X-Forwarded-For header for proxied requests.

    Args:
        request: The incoming request

    Returns:
        The client IP address or None
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs; the first is the original client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return None
