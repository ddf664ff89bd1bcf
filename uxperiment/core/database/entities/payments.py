"""
Payment entity models.

Payments are append-only records of money collected for subscriptions and
feed the revenue figures of the statistics module.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class PaymentStatus(str, Enum):
    """Settlement status of a payment."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class Payment(Base, table=True):
    """Payment collected for a subscription.

    Table: payments
    """

    __tablename__ = "payments"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", index=True)
    subscription_id: Optional[int] = Field(default=None, foreign_key="subscriptions.id", index=True)

    amount: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    status: str = Field(default=PaymentStatus.COMPLETED.value, max_length=16, index=True)
    payment_method: Optional[str] = Field(default=None, max_length=64)
    transaction_id: Optional[str] = Field(default=None, max_length=128)

    payment_date: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"Payment(id={self.id}, user_id={self.user_id}, amount={self.amount}, status={self.status})"
