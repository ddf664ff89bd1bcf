"""
Component I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for the component catalogue.
Listing responses carry per-viewer flags; content is withheld for locked
premium components.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ComponentRead(BaseModel):
    """Full component, returned when the viewer has access."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    category: str
    color: str
    css_content: str
    html_content: Optional[str] = None
    requires_subscription: bool
    user_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ComponentListItem(BaseModel):
    """Catalogue entry with the viewer's favorite and lock state."""

    id: int
    name: str
    description: Optional[str] = None
    category: str
    color: str
    css_content: Optional[str] = Field(default=None, description="Withheld when is_locked")
    html_content: Optional[str] = Field(default=None, description="Withheld when is_locked")
    requires_subscription: bool
    user_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    is_favorited: bool = False
    is_locked: bool = False


class ComponentSummary(BaseModel):
    """Compact component reference embedded in other payloads."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    color: str
    requires_subscription: bool


class ComponentCreate(BaseModel):
    """Schema for creating a component. Content rules are checked by the service."""

    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    color: Optional[str] = None
    css_content: str
    html_content: Optional[str] = None
    requires_subscription: bool = False


class ComponentUpdate(BaseModel):
    """Partial component update; the merged result is re-validated."""

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    color: Optional[str] = None
    css_content: Optional[str] = None
    html_content: Optional[str] = None
    requires_subscription: Optional[bool] = None


class ValidationResult(BaseModel):
    """Outcome of component content validation."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
