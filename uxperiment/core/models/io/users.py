"""
User I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for account management
endpoints. Password hashes never leave the server.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from uxperiment.core.database.entities.users import UserRole, UserStatus


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    local, _, domain = value.partition("@")
    if not local or "." not in domain:
        raise ValueError("Invalid email address")
    return value


class UserRead(BaseModel):
    """Schema for reading a user from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
    role: UserRole
    status: UserStatus
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserCreate(BaseModel):
    """Schema for creating a user via the admin API."""

    email: str = Field(description="Unique login email")
    password: str = Field(min_length=6, description="Plain-text password, hashed before storage")
    name: Optional[str] = Field(default=None, max_length=255)
    picture: Optional[str] = None
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


class UserUpdate(BaseModel):
    """Schema for updating a user via the admin API."""

    name: Optional[str] = Field(default=None, max_length=255)
    picture: Optional[str] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
