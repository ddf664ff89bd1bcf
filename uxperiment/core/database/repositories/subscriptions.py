"""
Subscription repository implementation.

This module provides data access operations for user subscriptions,
including the active-window query that gates premium content.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.subscriptions import Subscription, SubscriptionStatus
from .base import AsyncQueryBuilder, AsyncSQLModelRepository


def _active_at(at: datetime):
    """SQL condition for subscriptions granting access at ``at``."""
    return (
        Subscription.status == SubscriptionStatus.ACTIVE.value,
        Subscription.start_date <= at,
        or_(Subscription.end_date.is_(None), Subscription.end_date > at),  # type: ignore
    )


class SubscriptionRepository(AsyncSQLModelRepository[Subscription]):
    """Repository for subscription data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Subscription)

    async def has_active(self, user_id: int, at: datetime) -> bool:
        """Whether the user holds a subscription that is active at ``at``."""
        stmt = select(Subscription.id).where(Subscription.user_id == user_id, *_active_at(at)).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def get_latest_for_user(self, user_id: int) -> Optional[Subscription]:
        """Most recently started subscription of a user, regardless of status."""
        stmt = (
            select(Subscription)
            .where(Subscription.user_id == user_id)
            .order_by(Subscription.start_date.desc(), Subscription.id.desc())  # type: ignore
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_with_status(self, user_id: int, status: str) -> List[Subscription]:
        stmt = select(Subscription).where(Subscription.user_id == user_id, Subscription.status == status)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(
        self,
        status: Optional[str] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Subscription]:
        """List subscriptions newest first with optional filters."""
        stmt = select(Subscription)
        stmt = AsyncQueryBuilder.apply_filters(stmt, Subscription, {"status": status, "user_id": user_id})
        stmt = stmt.order_by(Subscription.start_date.desc(), Subscription.id.desc())  # type: ignore
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_active(self, at: datetime) -> int:
        """Count subscriptions that grant access at ``at``."""
        stmt = select(func.count()).select_from(Subscription).where(*_active_at(at))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_for_plan(self, plan_id: int) -> int:
        stmt = select(func.count()).select_from(Subscription).where(Subscription.plan_id == plan_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list_overdue(self, now: datetime) -> List[Subscription]:
        """ACTIVE subscriptions whose end date has passed."""
        stmt = select(Subscription).where(
            Subscription.status == SubscriptionStatus.ACTIVE.value,
            Subscription.end_date.is_not(None),  # type: ignore
            Subscription.end_date <= now,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
