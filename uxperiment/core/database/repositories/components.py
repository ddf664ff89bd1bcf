"""
Component repository implementation.

This module provides data access operations for catalogue components,
including text search and the explicit cascade used when a component is
deleted.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.component_views import ComponentView
from ..entities.components import Component
from ..entities.favorites import Favorite
from .base import AsyncQueryBuilder, AsyncSQLModelRepository


class ComponentRepository(AsyncSQLModelRepository[Component]):
    """Repository for component data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Component)

    async def search(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Component]:
        """List components newest first.

        Args:
            category: Exact category match
            search: Case-insensitive substring of name or description
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            List of Component instances
        """
        stmt = select(Component)
        stmt = AsyncQueryBuilder.apply_filters(stmt, Component, {"category": category})
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Component.name).like(pattern),
                    func.lower(func.coalesce(Component.description, "")).like(pattern),
                )
            )
        stmt = stmt.order_by(Component.created_at.desc(), Component.id.desc())  # type: ignore
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_categories(self) -> List[str]:
        stmt = select(Component.category).distinct().order_by(Component.category)
        result = await self.session.execute(stmt)
        return [row for row in result.scalars().all() if row]

    async def get_many(self, component_ids: Iterable[int]) -> Dict[int, Component]:
        """Load several components keyed by id; unknown ids are skipped."""
        ids = list(set(component_ids))
        if not ids:
            return {}
        result = await self.session.execute(select(Component).where(Component.id.in_(ids)))  # type: ignore
        return {component.id: component for component in result.scalars().all()}

    async def delete_cascade(self, component: Component) -> None:
        """Delete a component together with its favorites and view log."""
        await self.session.execute(delete(Favorite).where(Favorite.component_id == component.id))
        await self.session.execute(delete(ComponentView).where(ComponentView.component_id == component.id))
        await self.session.delete(component)
        await self.session.commit()
