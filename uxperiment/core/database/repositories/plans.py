"""
Plan repository implementation.

This module provides data access operations for subscription plans.
"""

from __future__ import annotations

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.plans import Plan
from .base import AsyncSQLModelRepository


class PlanRepository(AsyncSQLModelRepository[Plan]):
    """Repository for plan data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Plan)

    async def list_by_price(self, only_active: bool = False) -> List[Plan]:
        """List plans ordered by price ascending.

        Args:
            only_active: Skip plans that are not offered anymore

        Returns:
            List of Plan instances
        """
        stmt = select(Plan)
        if only_active:
            stmt = stmt.where(Plan.is_active == True)  # noqa: E712
        stmt = stmt.order_by(Plan.price.asc(), Plan.id.asc())  # type: ignore
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
