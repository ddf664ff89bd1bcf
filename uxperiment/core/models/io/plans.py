"""
Plan I/O models for API requests and responses.

Plans store their feature list as JSON text; the API always exposes it as a
list of strings and prices as plain numbers.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import decimal_to_float


class PlanRead(BaseModel):
    """Schema for reading a plan from API."""

    id: int
    name: str
    description: str
    price: float
    effective_price: float = Field(description="Price after discount")
    duration_days: int = Field(description="Subscription length; 0 means unlimited")
    features: List[str]
    is_active: bool
    discount: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("price", "effective_price", mode="before")
    @classmethod
    def money_as_float(cls, value):
        return decimal_to_float(value)


class PlanCreate(BaseModel):
    """Schema for creating a plan via API."""

    name: str = Field(min_length=1, max_length=100)
    description: str = ""
    price: float = Field(ge=0)
    duration: int = Field(default=30, ge=0, description="Duration in days; 0 means unlimited")
    features: List[str] = Field(default_factory=list)
    is_active: bool = True
    discount: Optional[int] = Field(default=None, ge=0, le=100)


class PlanUpdate(BaseModel):
    """Schema for updating a plan via API."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, ge=0)
    features: Optional[List[str]] = None
    is_active: Optional[bool] = None
    discount: Optional[int] = Field(default=None, ge=0, le=100)
