"""
Daily statistics repository implementation.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.statistics import DailyStatistics
from .base import AsyncSQLModelRepository


class StatisticsRepository(AsyncSQLModelRepository[DailyStatistics]):
    """Repository for daily statistics buckets using SQLModel."""

    default_order_by = "date"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, DailyStatistics)

    async def get_by_date(self, day: datetime) -> Optional[DailyStatistics]:
        result = await self.session.execute(select(DailyStatistics).where(DailyStatistics.date == day))
        return result.scalars().first()

    async def list_between(self, start: datetime, end: datetime) -> List[DailyStatistics]:
        """Buckets with ``start <= date <= end`` ordered by date ascending."""
        stmt = (
            select(DailyStatistics)
            .where(DailyStatistics.date >= start, DailyStatistics.date <= end)
            .order_by(DailyStatistics.date.asc())  # type: ignore
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
