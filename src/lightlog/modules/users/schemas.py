"""Pydantic schemas for user operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from lightlog.core.constants import (
    MAX_PASSWORD_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_PASSWORD_LENGTH,
)


class UserCreate(BaseModel):
    """Schema for creating a new user with password."""

    username: str = Field(
        ..., min_length=1, max_length=MAX_USERNAME_LENGTH, pattern=r"^[\w.\-]+$"
    )
    email: EmailStr
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )


class UserResponse(BaseModel):
    """Schema for user response data. Never carries the password hash."""

    id: UUID
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Schema for a successful login."""

    token: str
    user: UserResponse
    expires_at: datetime
