"""
Favorite repository implementation.

This module provides data access operations for user bookmarks and the
favorite rankings used by statistics.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.favorites import Favorite
from .base import AsyncQueryBuilder, AsyncSQLModelRepository


class FavoriteRepository(AsyncSQLModelRepository[Favorite]):
    """Repository for favorite data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Favorite)

    async def get_by_user_and_component(self, user_id: int, component_id: int) -> Optional[Favorite]:
        stmt = select(Favorite).where(Favorite.user_id == user_id, Favorite.component_id == component_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_for_user(self, user_id: int) -> List[Favorite]:
        """Favorites of a user, newest first."""
        stmt = (
            select(Favorite)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())  # type: ignore
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_recent(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Favorite]:
        stmt = select(Favorite).order_by(Favorite.created_at.desc(), Favorite.id.desc())  # type: ignore
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def favorited_component_ids(self, user_id: int, component_ids: Iterable[int]) -> Set[int]:
        """Subset of ``component_ids`` the user has favorited."""
        ids = list(component_ids)
        if not ids:
            return set()
        stmt = select(Favorite.component_id).where(
            Favorite.user_id == user_id,
            Favorite.component_id.in_(ids),  # type: ignore
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def top_components(self, limit: int) -> List[Tuple[int, int]]:
        """``(component_id, favorite count)`` pairs, most favorited first, ties by id."""
        favorites = func.count(Favorite.id).label("favorites")
        stmt = (
            select(Favorite.component_id, favorites)
            .group_by(Favorite.component_id)
            .order_by(favorites.desc(), Favorite.component_id.asc())  # type: ignore
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(int(row[0]), int(row[1])) for row in result.all()]
