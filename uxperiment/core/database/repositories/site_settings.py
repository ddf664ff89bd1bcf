"""
Site setting repository implementation.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.site_settings import Setting
from .base import AsyncSQLModelRepository


class SettingRepository(AsyncSQLModelRepository[Setting]):
    """Repository for site settings using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Setting)

    async def get_by_key(self, section: str, key: str) -> Optional[Setting]:
        stmt = select(Setting).where(Setting.section == section, Setting.key == key)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_ordered(self) -> List[Setting]:
        result = await self.session.execute(select(Setting).order_by(Setting.section, Setting.key))
        return list(result.scalars().all())
