"""
Subscription entity models.

A subscription ties a user to a plan for a period of time. Only ACTIVE
subscriptions whose period covers the current instant grant premium access.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class SubscriptionStatus(str, Enum):
    """Lifecycle status of a subscription."""

    ACTIVE = "ACTIVE"
    CANCELED = "CANCELED"
    EXPIRED = "EXPIRED"
    PENDING = "PENDING"


class Subscription(Base, table=True):
    """User subscription to a plan.

    Table: subscriptions
    """

    __tablename__ = "subscriptions"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", index=True)
    plan_id: int = Field(foreign_key="plans.id", index=True)

    # Period; a missing end date never expires
    start_date: datetime = Field(default_factory=utc_now)
    end_date: Optional[datetime] = Field(default=None)

    status: str = Field(default=SubscriptionStatus.ACTIVE.value, max_length=16, index=True)
    payment_method: Optional[str] = Field(default=None, max_length=64)
    transaction_id: Optional[str] = Field(default=None, max_length=128)
    cancel_date: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def is_active_at(self, at: datetime) -> bool:
        """Whether this subscription grants access at the given instant."""
        if self.status != SubscriptionStatus.ACTIVE.value:
            return False
        if self.start_date > at:
            return False
        return self.end_date is None or self.end_date > at

    def __repr__(self) -> str:
        return f"Subscription(id={self.id}, user_id={self.user_id}, plan_id={self.plan_id}, status={self.status})"
