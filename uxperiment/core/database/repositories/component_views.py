"""
Component view repository implementation.

This module provides data access operations for the component view log and
the per-day aggregates the statistics module rolls up.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.component_views import ComponentView
from .base import AsyncSQLModelRepository


class ComponentViewRepository(AsyncSQLModelRepository[ComponentView]):
    """Repository for component view data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ComponentView)

    async def counts_between(self, start: datetime, end: datetime) -> Dict[int, int]:
        """View count per component for views in ``[start, end)``."""
        stmt = (
            select(ComponentView.component_id, func.count(ComponentView.id))
            .where(ComponentView.timestamp >= start, ComponentView.timestamp < end)
            .group_by(ComponentView.component_id)
        )
        result = await self.session.execute(stmt)
        return {int(component_id): int(count) for component_id, count in result.all()}

    async def top_components(self, start: datetime, end: datetime, limit: int) -> List[Tuple[int, int]]:
        """``(component_id, view count)`` pairs in ``[start, end)``, most viewed first, ties by id."""
        views = func.count(ComponentView.id).label("views")
        stmt = (
            select(ComponentView.component_id, views)
            .where(ComponentView.timestamp >= start, ComponentView.timestamp < end)
            .group_by(ComponentView.component_id)
            .order_by(views.desc(), ComponentView.component_id.asc())  # type: ignore
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(int(row[0]), int(row[1])) for row in result.all()]
