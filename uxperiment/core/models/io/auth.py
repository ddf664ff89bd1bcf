"""
Authentication I/O models for API requests and responses.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .users import UserRead, _normalize_email


class LoginRequest(BaseModel):
    """Credentials for password login."""

    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return value.strip().lower()


class RegisterRequest(BaseModel):
    """Self-service sign-up."""

    email: str
    password: str = Field(min_length=6)
    name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


class TokenResponse(BaseModel):
    """Issued session token together with the authenticated user."""

    access_token: str
    token_type: str = "bearer"
    user: UserRead


class SessionCheckResponse(BaseModel):
    """Result of probing the current session; never an error."""

    authenticated: bool
    user: Optional[UserRead] = None
    message: Optional[str] = None
