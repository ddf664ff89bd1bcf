"""
User repository implementation.

This module provides data access operations for marketplace accounts,
including lookup by email and the sign-up/login counts used by statistics.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.components import Component
from ..entities.favorites import Favorite
from ..entities.payments import Payment
from ..entities.subscriptions import Subscription
from ..entities.users import User
from .base import AsyncQueryBuilder, AsyncSQLModelRepository


class UserRepository(AsyncSQLModelRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, compared case-insensitively."""
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def search(
        self,
        role: Optional[str] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[User]:
        """List users newest first, optionally filtered by role and status."""
        stmt = select(User)
        stmt = AsyncQueryBuilder.apply_filters(stmt, User, {"role": role, "status": status})
        stmt = stmt.order_by(User.created_at.desc(), User.id.desc())  # type: ignore
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_all(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return int(result.scalar_one())

    async def count_created_between(self, start: datetime, end: datetime) -> int:
        """Count sign-ups in ``[start, end)``."""
        stmt = select(func.count()).select_from(User).where(User.created_at >= start, User.created_at < end)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_logged_in_between(self, start: datetime, end: datetime) -> int:
        """Count users whose last login falls in ``[start, end)``."""
        stmt = (
            select(func.count())
            .select_from(User)
            .where(User.last_login.is_not(None), User.last_login >= start, User.last_login < end)  # type: ignore
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def delete_cascade(self, user: User) -> None:
        """Delete a user with their favorites, subscriptions and payments.

        Authored components are kept and lose their author.
        """
        await self.session.execute(delete(Favorite).where(Favorite.user_id == user.id))
        await self.session.execute(delete(Payment).where(Payment.user_id == user.id))
        await self.session.execute(delete(Subscription).where(Subscription.user_id == user.id))
        await self.session.execute(update(Component).where(Component.user_id == user.id).values(user_id=None))
        await self.session.delete(user)
        await self.session.commit()
