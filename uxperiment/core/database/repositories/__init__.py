"""
Data access layer.

One async repository per table, all built on ``AsyncSQLModelRepository``,
plus ``RepositoryBundle`` which groups them around a single session.
"""

from .base import AsyncBaseRepository, AsyncQueryBuilder, AsyncSQLModelRepository
from .bundle import RepositoryBundle, build_repositories
from .component_views import ComponentViewRepository
from .components import ComponentRepository
from .favorites import FavoriteRepository
from .payments import PaymentRepository
from .plans import PlanRepository
from .site_settings import SettingRepository
from .statistics import StatisticsRepository
from .subscriptions import SubscriptionRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "AsyncQueryBuilder",
    "AsyncSQLModelRepository",
    "ComponentRepository",
    "ComponentViewRepository",
    "FavoriteRepository",
    "PaymentRepository",
    "PlanRepository",
    "RepositoryBundle",
    "SettingRepository",
    "StatisticsRepository",
    "SubscriptionRepository",
    "UserRepository",
    "build_repositories",
]
