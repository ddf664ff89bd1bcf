"""
Daily statistics entity models.

One row per calendar day (UTC) rolling up component views, sign-ups,
logins, subscriptions and revenue. Rankings are stored as JSON snapshots
so the dashboard can chart historical days without recomputing them.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import Base


class DailyStatistics(Base, table=True):
    """Daily statistics bucket.

    Table: statistics
    """

    __tablename__ = "statistics"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    # Start of the day this bucket covers
    date: datetime = Field(unique=True, index=True)

    # {component_id: view count}; JSON object keys are strings
    component_views: Dict[str, int] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    new_users: int = Field(default=0)
    active_users: int = Field(default=0)
    total_subscriptions: int = Field(default=0)
    revenue: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    most_viewed_components: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    most_favorited_components: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    conversion_rate: Decimal = Field(default=Decimal("0.00"), max_digits=7, decimal_places=2)

    def __repr__(self) -> str:
        return f"DailyStatistics(date={self.date:%Y-%m-%d}, views={sum(self.component_views.values())})"
