"""Authentication module for sessions, passwords, and bearer tokens."""

from lightlog.core.auth.backend import (
    PasswordHasher,
    extract_bearer_token,
    generate_token,
    token_prefix,
)
from lightlog.core.auth.middleware import (
    ProjectTokenMiddleware,
    SessionAuthMiddleware,
)
from lightlog.core.auth.service import AuthService


__all__ = [
    # Service
    "AuthService",
    # Password utilities
    "PasswordHasher",
    # Middleware
    "ProjectTokenMiddleware",
    "SessionAuthMiddleware",
    # Token utilities
    "extract_bearer_token",
    "generate_token",
    "token_prefix",
]
