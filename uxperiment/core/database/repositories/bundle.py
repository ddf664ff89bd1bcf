"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one session, for easy dependency injection in services.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .component_views import ComponentViewRepository
from .components import ComponentRepository
from .favorites import FavoriteRepository
from .payments import PaymentRepository
from .plans import PlanRepository
from .site_settings import SettingRepository
from .statistics import StatisticsRepository
from .subscriptions import SubscriptionRepository
from .users import UserRepository


@dataclass(frozen=True)
class RepositoryBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    users: UserRepository
    plans: PlanRepository
    subscriptions: SubscriptionRepository
    payments: PaymentRepository
    components: ComponentRepository
    favorites: FavoriteRepository
    views: ComponentViewRepository
    statistics: StatisticsRepository
    settings: SettingRepository

    async def commit(self) -> None:
        """Commit every change staged through any repository of the bundle."""
        await self.users.session.commit()


def build_repositories(session: AsyncSession) -> RepositoryBundle:
    """Build a RepositoryBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return RepositoryBundle(
        users=UserRepository(session),
        plans=PlanRepository(session),
        subscriptions=SubscriptionRepository(session),
        payments=PaymentRepository(session),
        components=ComponentRepository(session),
        favorites=FavoriteRepository(session),
        views=ComponentViewRepository(session),
        statistics=StatisticsRepository(session),
        settings=SettingRepository(session),
    )
