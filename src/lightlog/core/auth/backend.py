"""Authentication backend utilities.

This module provides core authentication helpers:
- Password hashing with bcrypt (cost-tunable)
- Random token generation
- Bearer token extraction from the Authorization header
"""

import re
import secrets

from passlib.context import CryptContext

from lightlog.core.constants import BCRYPT_ROUNDS, TOKEN_LOG_PREFIX_LENGTH


BEARER_PATTERN = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)


# ============================================================
# Password Utilities
# ============================================================


class PasswordHasher:
    """Salted, slow one-way password hashing.

    Attributes:
        rounds: bcrypt cost factor (log2 of the iteration count)
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Bcrypt hash of the password
        """
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Bcrypt hash to verify against

        Returns:
            True if password matches, False otherwise
        """
        return self._context.verify(plain_password, hashed_password)


# ============================================================
# Token Utilities
# ============================================================


def generate_token(nbytes: int) -> str:
    """Generate a hex token from ``nbytes`` cryptographically random bytes."""
    return secrets.token_hex(nbytes)


def extract_bearer_token(header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    Args:
        header: Raw header value, or None when absent

    Returns:
        The token, or None if the header is absent or malformed
    """
    if not header:
        return None
    match = BEARER_PATTERN.match(header)
    if match is None:
        return None
    return match.group(1).strip() or None


def token_prefix(token: str, length: int = TOKEN_LOG_PREFIX_LENGTH) -> str:
    """Shorten a token for log output."""
    return f"{token[:length]}..."
