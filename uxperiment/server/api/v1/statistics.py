"""
Statistics Endpoints.

Recording a component view is public so the gallery can report previews
from anonymous visitors. Every reporting endpoint is restricted to
administrators.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Query, status

from uxperiment.core.database.base import utc_now
from uxperiment.core.models.io.statistics import (
    DailyStatisticsRead,
    OverviewRead,
    RankedComponent,
    ViewCreate,
    ViewRead,
)
from uxperiment.server.core.security import AdminUserDep, OptionalUserDep
from uxperiment.server.services.deps import StatisticsServiceDep

router = APIRouter(tags=["statistics"])


@router.post(
    "/view",
    response_model=ViewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Component View",
    description="Record that a component was previewed. Attributed to the caller when logged in.",
    responses={404: {"description": "Component not found"}},
)
async def record_view(data: ViewCreate, viewer: OptionalUserDep, stats: StatisticsServiceDep) -> ViewRead:
    """
    Record a component view.

    - **component_id**: The previewed component.
    - **session_id**: Optional client session identifier for anonymous visitors.
    """
    view = await stats.record_view(data.component_id, viewer, data.session_id)
    return ViewRead.model_validate(view)


@router.get(
    "/daily",
    response_model=DailyStatisticsRead,
    summary="Daily Statistics",
    description="Statistics bucket of one day (UTC), computed on first request.",
)
async def daily_statistics(
    _: AdminUserDep,
    stats: StatisticsServiceDep,
    day: Optional[date] = Query(default=None, alias="date", description="Day to report, defaults to today"),
    refresh: bool = Query(default=False, description="Recompute an existing bucket"),
) -> DailyStatisticsRead:
    """
    Get the statistics bucket of a day.

    The bucket covers `[00:00, next day 00:00)` UTC. It is computed and stored
    the first time it is requested; later requests return the stored row
    unless **refresh** is set.

    - **component_views**: View count per component id.
    - **new_users** / **active_users**: Sign-ups and logins of the day.
    - **total_subscriptions**: Subscriptions active at computation time.
    - **revenue**: Completed payments of the day.
    - **conversion_rate**: `total_subscriptions / active_users * 100`.
    """
    bucket = await stats.daily(day or utc_now().date(), refresh=refresh)
    return DailyStatisticsRead.model_validate(bucket)


@router.get(
    "/range",
    response_model=List[DailyStatisticsRead],
    summary="Statistics Range",
    description="Stored daily buckets between two days (inclusive), oldest first.",
    responses={422: {"description": "start is after end"}},
)
async def statistics_range(
    _: AdminUserDep, stats: StatisticsServiceDep, start: date = Query(), end: date = Query()
) -> List[DailyStatisticsRead]:
    buckets = await stats.range(start, end)
    return [DailyStatisticsRead.model_validate(bucket) for bucket in buckets]


@router.get(
    "/overview",
    response_model=OverviewRead,
    summary="Dashboard Overview",
    description="Totals, 30-day growth and recent buckets for the admin dashboard.",
)
async def overview(_: AdminUserDep, stats: StatisticsServiceDep) -> OverviewRead:
    """
    Dashboard overview.

    Growth compares the last 30 days with the 30 days before. When the
    previous period is empty, growth is 100 if anything happened in the
    current period and 0 otherwise.
    """
    data = await stats.overview()
    data["daily"] = [DailyStatisticsRead.model_validate(bucket) for bucket in data["daily"]]
    return OverviewRead.model_validate(data)


@router.get(
    "/most-viewed",
    response_model=List[RankedComponent],
    summary="Most Viewed Components",
    description="Components ranked by views between two days, the last 30 days by default.",
)
async def most_viewed(
    _: AdminUserDep,
    stats: StatisticsServiceDep,
    start: Optional[date] = None,
    end: Optional[date] = None,
    limit: int = Query(default=10, ge=1, le=100),
) -> List[RankedComponent]:
    return [RankedComponent.model_validate(entry) for entry in await stats.most_viewed(start, end, limit)]


@router.get(
    "/most-favorited",
    response_model=List[RankedComponent],
    summary="Most Favorited Components",
)
async def most_favorited(
    _: AdminUserDep, stats: StatisticsServiceDep, limit: int = Query(default=10, ge=1, le=100)
) -> List[RankedComponent]:
    return [RankedComponent.model_validate(entry) for entry in await stats.most_favorited(limit)]
