"""Composable gateway middleware.

A middleware wraps the next stage of a route. It either short-circuits by
returning its own response, or awaits ``call_next(request)`` and may
post-process what comes back:

    class RequireJson(GatewayMiddleware):
        async def dispatch(self, request, call_next):
            if request.headers.get("content-type") != "application/json":
                return error("Expected JSON", 415)
            return await call_next(request)

The signature mirrors Starlette's ``BaseHTTPMiddleware.dispatch`` so the same
mental model applies at both layers.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from functools import partial

from starlette.requests import Request
from starlette.responses import Response


Handler = Callable[[Request], Awaitable[Response]]
CallNext = Handler


class GatewayMiddleware(ABC):
    """Base class for route-level middleware."""

    @abstractmethod
    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        """Process the request.

        Args:
            request: The incoming request
            call_next: The next middleware, or the terminal handler

        Returns:
            The response to send
        """


def build_chain(middleware: Sequence[GatewayMiddleware], handler: Handler) -> Handler:
    """Compose middleware around a terminal handler.

    The first middleware in the sequence is the outermost wrapper, so it runs
    first and may reject the request before anything deeper executes.

    Args:
        middleware: Ordered middleware list
        handler: The terminal request handler

    Returns:
        A single callable running the whole chain
    """
    chain = handler
    for item in reversed(middleware):
        chain = partial(item.dispatch, call_next=chain)
    return chain
