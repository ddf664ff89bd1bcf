"""
Payment repository implementation.

This module provides data access operations for payments and the revenue
aggregates consumed by the statistics module.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.payments import Payment, PaymentStatus
from .base import AsyncQueryBuilder, AsyncSQLModelRepository


def _as_decimal(value) -> Decimal:
    # SQLite hands SUM() back as float; normalize to cents
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


class PaymentRepository(AsyncSQLModelRepository[Payment]):
    """Repository for payment data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Payment)

    async def search(
        self,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Payment]:
        """List payments newest first with optional filters."""
        stmt = select(Payment)
        stmt = AsyncQueryBuilder.apply_filters(stmt, Payment, {"user_id": user_id, "status": status})
        stmt = stmt.order_by(Payment.payment_date.desc(), Payment.id.desc())  # type: ignore
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sum_completed(self, start: Optional[datetime] = None, end: Optional[datetime] = None) -> Decimal:
        """Sum COMPLETED payment amounts, optionally within ``[start, end)``."""
        stmt = select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.status == PaymentStatus.COMPLETED.value
        )
        if start is not None:
            stmt = stmt.where(Payment.payment_date >= start)
        if end is not None:
            stmt = stmt.where(Payment.payment_date < end)
        result = await self.session.execute(stmt)
        return _as_decimal(result.scalar_one())
