"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Random byte counts (tokens are hex-encoded, so twice as many characters)
SESSION_ID_BYTES = 32
SESSION_TOKEN_BYTES = 64
PROJECT_TOKEN_BYTES = 32

# String field lengths
MAX_USERNAME_LENGTH = 100
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_IPV6_LENGTH = 45
MAX_USER_AGENT_LENGTH = 512
SESSION_ID_LENGTH = SESSION_ID_BYTES * 2
SESSION_TOKEN_LENGTH = SESSION_TOKEN_BYTES * 2
PROJECT_TOKEN_LENGTH = PROJECT_TOKEN_BYTES * 2

# Password requirements
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 72  # bcrypt ignores bytes past 72
BCRYPT_ROUNDS = 12

# Sessions
SESSION_LIFETIME_HOURS = 24

# Log tokens only by prefix
TOKEN_LOG_PREFIX_LENGTH = 16

# Ingestion
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")
DEFAULT_MAX_BATCH_SIZE = 1000

# Schema field names
FIELD_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"
