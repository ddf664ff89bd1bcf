"""
Subscription and payment I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from uxperiment.core.database.entities.payments import PaymentStatus
from uxperiment.core.database.entities.subscriptions import SubscriptionStatus

from .common import decimal_to_float
from .plans import PlanRead


class SubscriptionRead(BaseModel):
    """Schema for reading a subscription from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    plan_id: int
    start_date: datetime
    end_date: Optional[datetime] = None
    status: SubscriptionStatus
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    cancel_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class SubscriptionWithPlan(SubscriptionRead):
    """Subscription with its plan embedded."""

    plan: Optional[PlanRead] = None


class SubscribeRequest(BaseModel):
    """Subscribe to a plan. ``user_id`` is honoured for admins only."""

    plan_id: int
    payment_method: Optional[str] = Field(default=None, max_length=64)
    user_id: Optional[int] = None


class SubscriptionAssign(BaseModel):
    """Admin assignment of an explicit subscription period."""

    plan_id: int
    start_date: datetime
    end_date: datetime
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    payment_method: Optional[str] = Field(default=None, max_length=64)


class RenewRequest(BaseModel):
    duration: Optional[int] = Field(default=None, gt=0, description="Days to extend; defaults to the plan duration")
    payment_method: Optional[str] = Field(default=None, max_length=64)


class ExpireResult(BaseModel):
    expired: int = Field(description="Number of subscriptions marked EXPIRED")


class PaymentRead(BaseModel):
    """Schema for reading a payment from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    subscription_id: Optional[int] = None
    amount: float
    status: PaymentStatus
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    payment_date: datetime

    @field_validator("amount", mode="before")
    @classmethod
    def money_as_float(cls, value):
        return decimal_to_float(value)
