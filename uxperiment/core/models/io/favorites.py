"""
Favorite I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .components import ComponentSummary


class FavoriteRead(BaseModel):
    """Schema for reading a favorite from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    component_id: int
    created_at: datetime


class FavoriteWithComponent(FavoriteRead):
    """Favorite with an embedded component summary."""

    component: Optional[ComponentSummary] = None


class FavoriteCreate(BaseModel):
    """Add a favorite. ``user_id`` defaults to the caller; only admins may set another."""

    component_id: int
    user_id: Optional[int] = Field(default=None, description="Target user (admin only)")


class FavoriteToggleRequest(BaseModel):
    component_id: int


class FavoriteToggleResponse(BaseModel):
    """New favorite state after a toggle."""

    component_id: int
    is_favorite: bool


class FavoriteCheckResponse(BaseModel):
    is_favorite: bool
