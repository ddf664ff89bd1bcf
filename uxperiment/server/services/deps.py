"""
Service Dependencies.

Provides per-request service instances for API endpoints. Every service of a
request shares the request's database session through one RepositoryBundle;
the favorite-state cache is a process-wide singleton.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from uxperiment.core.database import get_session
from uxperiment.core.database.repositories import RepositoryBundle, build_repositories

from .access import AccessService
from .components import ComponentService
from .favorite_cache import FavoriteStateCache, get_favorite_cache
from .favorites import FavoriteService
from .plans import PlanService
from .settings import SettingsService
from .statistics import StatisticsService
from .subscriptions import SubscriptionService
from .users import UserService

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repositories(session: SessionDep) -> RepositoryBundle:
    return build_repositories(session)


RepositoriesDep = Annotated[RepositoryBundle, Depends(get_repositories)]
FavoriteCacheDep = Annotated[FavoriteStateCache, Depends(get_favorite_cache)]


def get_access_service(repos: RepositoriesDep) -> AccessService:
    return AccessService(repos)


AccessServiceDep = Annotated[AccessService, Depends(get_access_service)]


def get_favorite_service(
    repos: RepositoriesDep, access: AccessServiceDep, cache: FavoriteCacheDep
) -> FavoriteService:
    return FavoriteService(repos, access, cache)


def get_component_service(
    repos: RepositoriesDep, access: AccessServiceDep, cache: FavoriteCacheDep
) -> ComponentService:
    return ComponentService(repos, access, cache)


def get_statistics_service(repos: RepositoriesDep) -> StatisticsService:
    return StatisticsService(repos)


def get_plan_service(repos: RepositoriesDep) -> PlanService:
    return PlanService(repos)


def get_subscription_service(repos: RepositoriesDep) -> SubscriptionService:
    return SubscriptionService(repos)


def get_settings_service(repos: RepositoriesDep) -> SettingsService:
    return SettingsService(repos)


def get_user_service(repos: RepositoriesDep, cache: FavoriteCacheDep) -> UserService:
    return UserService(repos, cache)


FavoriteServiceDep = Annotated[FavoriteService, Depends(get_favorite_service)]
ComponentServiceDep = Annotated[ComponentService, Depends(get_component_service)]
StatisticsServiceDep = Annotated[StatisticsService, Depends(get_statistics_service)]
PlanServiceDep = Annotated[PlanService, Depends(get_plan_service)]
SubscriptionServiceDep = Annotated[SubscriptionService, Depends(get_subscription_service)]
SettingsServiceDep = Annotated[SettingsService, Depends(get_settings_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
