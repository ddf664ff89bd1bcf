"""
User entity models.

This module contains the database entity for marketplace accounts. Users
either sign up with an email and password or arrive through an external
identity provider, in which case no password hash is stored.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class UserRole(str, Enum):
    """Authorization role of an account."""

    USER = "user"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """Lifecycle status of an account."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class User(Base, table=True):
    """Marketplace account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Identity
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: Optional[str] = Field(default=None, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    picture: Optional[str] = Field(default=None, max_length=1024)
    google_id: Optional[str] = Field(default=None, max_length=64, unique=True)

    # Authorization
    role: str = Field(default=UserRole.USER.value, max_length=16)
    status: str = Field(default=UserStatus.ACTIVE.value, max_length=16)

    # Timestamps
    last_login: Optional[datetime] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value

    @property
    def display_name(self) -> str:
        """Name shown in the UI, falling back to the local part of the email."""
        return self.name or self.email.split("@")[0]

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
