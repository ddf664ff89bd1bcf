"""
Subscription plan entity models.

Plans define what a subscription costs and how long it lasts. The feature
list is stored as a JSON string for portability across database backends.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlmodel import Field

from ..base import Base, utc_now

# A duration of zero days means the plan never expires
UNLIMITED_DURATION = 0


class Plan(Base, table=True):
    """Subscription plan offered in the marketplace.

    Table: plans
    """

    __tablename__ = "plans"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    name: str = Field(max_length=100)
    description: str = Field(default="")
    price: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    duration_days: int = Field(default=30, ge=0)
    features: str = Field(default="[]", description="JSON array of feature descriptions")
    is_active: bool = Field(default=True, index=True)
    discount: Optional[int] = Field(default=None, ge=0, le=100, description="Discount in percent")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_unlimited(self) -> bool:
        return self.duration_days == UNLIMITED_DURATION

    @property
    def is_free(self) -> bool:
        return Decimal(self.price) <= 0

    def get_features_list(self) -> List[str]:
        """Get features as a list."""
        try:
            features = json.loads(self.features) if self.features else []
        except (json.JSONDecodeError, TypeError):
            return []
        return features if isinstance(features, list) else []

    def set_features_list(self, features: List[str]) -> None:
        """Set features from a list."""
        self.features = json.dumps(features)

    def __repr__(self) -> str:
        return f"Plan(id={self.id}, name={self.name}, price={self.price})"
