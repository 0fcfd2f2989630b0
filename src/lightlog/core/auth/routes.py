"""Authentication routes.

Provides endpoints for:
- Login/logout
- Current user lookup
- Token validity checks
"""

from starlette import status
from starlette.requests import Request
from starlette.responses import Response

from lightlog.core.auth.service import AuthService
from lightlog.core.constants import MAX_IPV6_LENGTH, MAX_USER_AGENT_LENGTH
from lightlog.core.http.middleware import GatewayMiddleware
from lightlog.core.http.requests import get_client_ip, missing_fields, read_json
from lightlog.core.http.responses import error, success
from lightlog.core.http.router import Router


def _get_client_info(request: Request) -> tuple[str | None, str | None]:
    """Extract client info from request, clipped to the stored column sizes."""
    user_agent = request.headers.get("User-Agent")
    ip_address = get_client_ip(request)
    if user_agent is not None:
        user_agent = user_agent[:MAX_USER_AGENT_LENGTH]
    if ip_address is not None:
        ip_address = ip_address[:MAX_IPV6_LENGTH]
    return user_agent, ip_address


class AuthRoutes:
    """Handlers for ``/api/auth/*``."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    def mount(self, router: Router, session_auth: GatewayMiddleware) -> None:
        """Register the auth routes.

        Args:
            router: The gateway router
            session_auth: Middleware guarding the session-only routes
        """
        router.post("/api/auth/login", self.login)
        router.post("/api/auth/logout", self.logout, middleware=[session_auth])
        router.get("/api/auth/me", self.me, middleware=[session_auth])
        router.post("/api/auth/check", self.check)

    async def login(self, request: Request) -> Response:
        """Login with username and password."""
        data = await read_json(request)
        missing = missing_fields(data, ("username", "password"))
        if missing:
            return error(
                "Missing required fields", status.HTTP_400_BAD_REQUEST, missing
            )

        user_agent, ip_address = _get_client_info(request)
        result = await self.auth_service.login(
            username=str(data["username"]),
            password=str(data["password"]),
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return success(result, "Login successful")

    async def logout(self, request: Request) -> Response:
        """Logout and delete the current session."""
        await self.auth_service.logout(request.state.auth_token)
        return success(message="Logged out successfully")

    async def me(self, request: Request) -> Response:
        """Return the authenticated user."""
        return success({"user": request.state.user})

    async def check(self, request: Request) -> Response:
        """Report whether a session token is valid.

        A valid check extends the session like any other verification.
        """
        data = await read_json(request)
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            return error("Token required", status.HTTP_400_BAD_REQUEST)
        if not isinstance(token, str):
            return success({"valid": False}, "Invalid or expired token")

        user = await self.auth_service.verify(token)
        if user is None:
            return success({"valid": False}, "Invalid or expired token")
        return success({"valid": True, "user": user}, "Token is valid")
