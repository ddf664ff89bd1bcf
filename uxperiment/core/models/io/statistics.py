"""
Statistics I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import decimal_to_float


class ViewCreate(BaseModel):
    """Record a component preview."""

    component_id: int
    session_id: Optional[str] = Field(default=None, max_length=128)


class ViewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    component_id: int
    user_id: Optional[int] = None
    session_id: Optional[str] = None
    timestamp: datetime


class RankedComponent(BaseModel):
    """Entry of a most-viewed or most-favorited ranking."""

    id: int
    name: str
    category: str
    views: Optional[int] = None
    favorites: Optional[int] = None


class DailyStatisticsRead(BaseModel):
    """Schema for reading a daily bucket from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    date: datetime
    component_views: Dict[str, int]
    new_users: int
    active_users: int
    total_subscriptions: int
    revenue: float
    most_viewed_components: List[RankedComponent]
    most_favorited_components: List[RankedComponent]
    conversion_rate: float

    @field_validator("revenue", "conversion_rate", mode="before")
    @classmethod
    def money_as_float(cls, value):
        return decimal_to_float(value)


class OverviewRead(BaseModel):
    """Dashboard headline figures."""

    total_users: int
    active_subscriptions: int
    total_revenue: float
    user_growth: float = Field(description="Percent change of sign-ups, last 30 days vs previous 30")
    revenue_growth: float = Field(description="Percent change of revenue, last 30 days vs previous 30")
    daily: List[DailyStatisticsRead]
    top_components: List[RankedComponent]

    @field_validator("total_revenue", mode="before")
    @classmethod
    def money_as_float(cls, value):
        return decimal_to_float(value)
