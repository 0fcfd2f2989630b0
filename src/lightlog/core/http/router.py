"""Gateway router.

Maps ``(method, path pattern)`` to a handler wrapped in an ordered middleware
chain. Patterns use ``{name}`` placeholders that bind a single path segment;
the special ``{path}`` placeholder binds greedily across slashes for
catch-all mounts:

    router = Router(cors=CorsPolicy.from_settings(settings))
    router.get("/api/projects/{id}", show_project, middleware=[session_auth])
    response = await router.dispatch("GET", "/api/projects/42")

The router never lets a failure escape: domain exceptions become their
envelope response and anything else becomes a 500 carrying the message.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog
from starlette import status
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import Message

from lightlog.core.errors import exception_to_response
from lightlog.core.http.middleware import GatewayMiddleware, Handler, build_chain
from lightlog.core.http.responses import error, no_content


if TYPE_CHECKING:
    from lightlog.config import Settings


logger = structlog.get_logger()

PARAM_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")
CATCH_ALL_PARAM = "path"


def compile_path(path: str) -> re.Pattern[str]:
    """Compile a route path into an anchored regex.

    Static text is escaped, ``{name}`` becomes ``(?P<name>[^/]+)`` and
    ``{path}`` becomes ``(?P<path>.+)``.

    Args:
        path: Route path such as ``/api/projects/{id}``

    Returns:
        Compiled pattern matching the whole request path

    Raises:
        re.error: If the same parameter name appears twice
    """
    parts: list[str] = []
    last = 0
    for match in PARAM_PATTERN.finditer(path):
        parts.append(re.escape(path[last : match.start()]))
        name = match.group(1)
        if name == CATCH_ALL_PARAM:
            parts.append(f"(?P<{name}>.+)")
        else:
            parts.append(f"(?P<{name}>[^/]+)")
        last = match.end()
    parts.append(re.escape(path[last:]))
    return re.compile("^" + "".join(parts) + "$")


@dataclass(frozen=True)
class CorsPolicy:
    """Cross-origin headers attached to every gateway response."""

    allow_origin: str = "*"
    allow_methods: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
    allow_headers: tuple[str, ...] = (
        "Content-Type",
        "X-Project-Token",
        "Authorization",
    )
    max_age: int = 86400

    @classmethod
    def from_settings(cls, settings: "Settings") -> "CorsPolicy":
        """Build the policy from application settings."""
        return cls(
            allow_origin=settings.cors_allow_origin,
            allow_methods=tuple(settings.cors_allow_methods),
            allow_headers=tuple(settings.cors_allow_headers),
            max_age=settings.cors_max_age,
        )

    @property
    def headers(self) -> dict[str, str]:
        """The headers to set on a response."""
        return {
            "Access-Control-Allow-Origin": self.allow_origin,
            "Access-Control-Allow-Methods": ", ".join(self.allow_methods),
            "Access-Control-Allow-Headers": ", ".join(self.allow_headers),
            "Access-Control-Max-Age": str(self.max_age),
        }

    def apply(self, response: Response) -> Response:
        """Set the CORS headers on a response and return it."""
        for name, value in self.headers.items():
            response.headers[name] = value
        return response


@dataclass(frozen=True)
class Route:
    """A registered route with its compiled pattern and composed chain."""

    method: str
    path: str
    handler: Handler
    middleware: tuple[GatewayMiddleware, ...] = ()
    pattern: re.Pattern[str] = field(init=False, repr=False)
    endpoint: Handler = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # Frozen dataclass: derived fields are set through object.__setattr__
        object.__setattr__(self, "pattern", compile_path(self.path))
        object.__setattr__(self, "endpoint", build_chain(self.middleware, self.handler))

    def match(self, method: str, path: str) -> dict[str, str] | None:
        """Return the bound path parameters, or None if this route doesn't match."""
        if method != self.method:
            return None
        found = self.pattern.match(path)
        if found is None:
            return None
        return found.groupdict()


class Router:
    """Ordered route table with middleware composition and fault containment.

    Attributes:
        routes: Registered routes in registration order
        middleware: Middleware prepended to every route registered afterwards
        cors: CORS policy applied to every response
    """

    def __init__(
        self,
        middleware: Iterable[GatewayMiddleware] = (),
        cors: CorsPolicy | None = None,
    ) -> None:
        self.routes: list[Route] = []
        self.middleware = tuple(middleware)
        self.cors = cors or CorsPolicy()

    # ============================================================
    # Registration
    # ============================================================

    def add_route(
        self,
        method: str,
        path: str,
        handler: Handler,
        middleware: Sequence[GatewayMiddleware] = (),
    ) -> Route:
        """Register a route.

        Args:
            method: HTTP method, case-insensitive
            path: Path pattern with optional ``{name}`` placeholders
            handler: Terminal handler receiving the request
            middleware: Route middleware, outermost first

        Returns:
            The registered route
        """
        route = Route(
            method=method.upper(),
            path=path,
            handler=handler,
            middleware=(*self.middleware, *middleware),
        )
        self.routes.append(route)
        return route

    def get(
        self, path: str, handler: Handler, middleware: Sequence[GatewayMiddleware] = ()
    ) -> Route:
        """Register a GET route."""
        return self.add_route("GET", path, handler, middleware)

    def post(
        self, path: str, handler: Handler, middleware: Sequence[GatewayMiddleware] = ()
    ) -> Route:
        """Register a POST route."""
        return self.add_route("POST", path, handler, middleware)

    def put(
        self, path: str, handler: Handler, middleware: Sequence[GatewayMiddleware] = ()
    ) -> Route:
        """Register a PUT route."""
        return self.add_route("PUT", path, handler, middleware)

    def delete(
        self, path: str, handler: Handler, middleware: Sequence[GatewayMiddleware] = ()
    ) -> Route:
        """Register a DELETE route."""
        return self.add_route("DELETE", path, handler, middleware)

    # ============================================================
    # Dispatch
    # ============================================================

    async def handle(self, request: Request) -> Response:
        """Route a request through its middleware chain and handler.

        This is the ASGI host's endpoint. Unmatched requests get a 404
        envelope; ``OPTIONS`` pre-flight requests with no explicit route get
        an empty 204 and ``HEAD`` falls back to the ``GET`` route. Every
        response carries the CORS headers.

        Args:
            request: The incoming request

        Returns:
            The response to send
        """
        method = request.method.upper()
        path = request.url.path
        # HEAD is answered by the matching GET route
        lookup = "GET" if method == "HEAD" else method

        for route in self.routes:
            params = route.match(lookup, path)
            if params is None:
                continue

            request.scope["path_params"] = params
            try:
                response = await route.endpoint(request)
            except Exception as exc:  # noqa: BLE001
                response = exception_to_response(exc, path)
            return self.cors.apply(response)

        if method == "OPTIONS":
            return self.cors.apply(no_content())

        logger.debug("route_not_found", method=method, path=path)
        return self.cors.apply(error("Not Found", status.HTTP_404_NOT_FOUND))

    async def dispatch(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str] | None = None,
        body: bytes = b"",
        client: tuple[str, int] | None = None,
    ) -> Response:
        """Dispatch a request described by its parts.

        Builds a Starlette request from the given method, path (which may
        carry a query string), headers and body, then runs ``handle``.

        Args:
            method: HTTP method
            path: Request path, optionally with ``?query``
            headers: Request headers
            body: Raw request body
            client: Optional ``(host, port)`` of the peer

        Returns:
            The response
        """
        path, _, query = path.partition("?")
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "server": ("gateway", 80),
            "client": client,
            "root_path": "",
            "path": path,
            "raw_path": path.encode(),
            "query_string": query.encode(),
            "headers": [
                (name.lower().encode("utf-8"), value.encode("utf-8"))
                for name, value in (headers or {}).items()
            ],
        }
        body_sent = False

        async def receive() -> Message:
            nonlocal body_sent
            if body_sent:
                return {"type": "http.disconnect"}
            body_sent = True
            return {"type": "http.request", "body": body, "more_body": False}

        return await self.handle(Request(scope, receive))
