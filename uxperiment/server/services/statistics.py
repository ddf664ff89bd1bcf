"""Component view tracking and daily statistics.

Views are appended to ``component_views`` as they happen. ``daily`` rolls a
calendar day (UTC, ``[start_of_day, next_day)``) up into one ``statistics``
row, computed on first request and returned unchanged afterwards unless a
refresh is asked for.
"""

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from uxperiment.core.database.base import utc_now
from uxperiment.core.database.entities.component_views import ComponentView
from uxperiment.core.database.entities.statistics import DailyStatistics
from uxperiment.core.database.entities.users import User
from uxperiment.core.database.repositories import RepositoryBundle
from uxperiment.core.logging_config import get_logger
from uxperiment.core.monitoring import log_component_view

from .errors import NotFoundError, ValidationFailedError

logger = get_logger(__name__)

TOP_COMPONENTS_LIMIT = 10
OVERVIEW_TOP_LIMIT = 5
GROWTH_WINDOW_DAYS = 30

_CENTS = Decimal("0.01")


def start_of_day(value: date) -> datetime:
    """Midnight of the given day as a naive UTC datetime."""
    return datetime(value.year, value.month, value.day)


def conversion_rate(total_subscriptions: int, active_users: int) -> Decimal:
    """Subscriptions per active user in percent, 0 without active users."""
    if active_users <= 0:
        return Decimal("0.00")
    rate = Decimal(total_subscriptions) * 100 / Decimal(active_users)
    return rate.quantize(_CENTS, rounding=ROUND_HALF_UP)


def growth_rate(current: Decimal, previous: Decimal) -> float:
    """Percent change between two periods.

    A previous value of zero yields 100 when anything happened in the current
    period and 0 otherwise.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    change = (Decimal(current) - Decimal(previous)) * 100 / Decimal(previous)
    return float(change.quantize(_CENTS, rounding=ROUND_HALF_UP))


class StatisticsService:
    """Records component views and computes usage analytics."""

    def __init__(self, repos: RepositoryBundle, clock: Callable[[], datetime] = utc_now) -> None:
        self.repos = repos
        self.clock = clock

    async def record_view(
        self, component_id: int, user: Optional[User] = None, session_id: Optional[str] = None
    ) -> ComponentView:
        """Append a view of a component."""
        component = await self.repos.components.get_by_id(component_id)
        if component is None:
            raise NotFoundError(f"Component {component_id} not found")

        user_id = user.id if user is not None else None
        view = await self.repos.views.create(
            ComponentView(component_id=component_id, user_id=user_id, session_id=session_id, timestamp=self.clock())
        )
        log_component_view(component_id, user_id, session_id)
        logger.debug(f"Recorded view of component {component_id} (user={user_id}, session={session_id})")
        return view

    async def daily(self, day: date, refresh: bool = False) -> DailyStatistics:
        """Return the bucket of a day, computing and persisting it when missing.

        Args:
            day: Calendar day (UTC)
            refresh: Recompute an existing bucket in place

        Returns:
            The persisted DailyStatistics row
        """
        bucket_date = start_of_day(day)
        existing = await self.repos.statistics.get_by_date(bucket_date)
        if existing is not None and not refresh:
            return existing

        bucket = existing or DailyStatistics(date=bucket_date)
        await self._fill(bucket, bucket_date, bucket_date + timedelta(days=1))
        logger.info(
            f"{'Refreshed' if existing is not None else 'Computed'} statistics for {bucket_date:%Y-%m-%d}: "
            f"views={sum(bucket.component_views.values())}, new_users={bucket.new_users}"
        )
        if existing is not None:
            return await self.repos.statistics.update(bucket)
        try:
            return await self.repos.statistics.create(bucket)
        except IntegrityError:
            # A concurrent request stored the same day first
            await self.repos.statistics.session.rollback()
            stored = await self.repos.statistics.get_by_date(bucket_date)
            if stored is None:
                raise
            return stored

    async def _fill(self, bucket: DailyStatistics, start: datetime, end: datetime) -> None:
        view_counts = await self.repos.views.counts_between(start, end)
        active_users = await self.repos.users.count_logged_in_between(start, end)
        total_subscriptions = await self.repos.subscriptions.count_active(self.clock())

        # JSON object keys are strings; assign fresh containers so the change is persisted
        bucket.component_views = {str(cid): count for cid, count in sorted(view_counts.items())}
        bucket.new_users = await self.repos.users.count_created_between(start, end)
        bucket.active_users = active_users
        bucket.total_subscriptions = total_subscriptions
        bucket.revenue = await self.repos.payments.sum_completed(start, end)
        bucket.most_viewed_components = await self._ranked(
            await self.repos.views.top_components(start, end, TOP_COMPONENTS_LIMIT), "views"
        )
        bucket.most_favorited_components = await self._ranked(
            await self.repos.favorites.top_components(TOP_COMPONENTS_LIMIT), "favorites"
        )
        bucket.conversion_rate = conversion_rate(total_subscriptions, active_users)

    async def _ranked(self, pairs: List[Tuple[int, int]], metric: str) -> List[Dict[str, object]]:
        """Attach component name and category to ``(component_id, count)`` pairs."""
        components = await self.repos.components.get_many(cid for cid, _ in pairs)
        ranked = []
        for component_id, count in pairs:
            component = components.get(component_id)
            if component is None:
                continue
            ranked.append({"id": component.id, "name": component.name, "category": component.category, metric: count})
        return ranked

    async def range(self, start: date, end: date) -> List[DailyStatistics]:
        """Stored buckets from ``start`` to ``end`` inclusive, oldest first."""
        if start > end:
            raise ValidationFailedError("start date must not be after end date", [f"start={start} > end={end}"])
        return await self.repos.statistics.list_between(start_of_day(start), start_of_day(end))

    async def overview(self) -> Dict[str, object]:
        """Dashboard headline figures over the last 30 days."""
        now = self.clock()
        window = timedelta(days=GROWTH_WINDOW_DAYS)
        current_start, previous_start = now - window, now - 2 * window

        new_users = await self.repos.users.count_created_between(current_start, now)
        previous_users = await self.repos.users.count_created_between(previous_start, current_start)
        revenue = await self.repos.payments.sum_completed(current_start, now)
        previous_revenue = await self.repos.payments.sum_completed(previous_start, current_start)

        return {
            "total_users": await self.repos.users.count_all(),
            "active_subscriptions": await self.repos.subscriptions.count_active(now),
            "total_revenue": await self.repos.payments.sum_completed(),
            "user_growth": growth_rate(Decimal(new_users), Decimal(previous_users)),
            "revenue_growth": growth_rate(revenue, previous_revenue),
            "daily": await self.repos.statistics.list_between(start_of_day(current_start.date()), now),
            "top_components": await self._ranked(
                await self.repos.views.top_components(current_start, now, OVERVIEW_TOP_LIMIT), "views"
            ),
        }

    async def most_viewed(
        self, start: Optional[date] = None, end: Optional[date] = None, limit: int = TOP_COMPONENTS_LIMIT
    ) -> List[Dict[str, object]]:
        """Most viewed components between two days (inclusive), last 30 days by default."""
        now = self.clock()
        window_end = start_of_day(end) + timedelta(days=1) if end is not None else now
        window_start = start_of_day(start) if start is not None else window_end - timedelta(days=GROWTH_WINDOW_DAYS)
        if window_start >= window_end:
            raise ValidationFailedError("start date must not be after end date", [f"start={start} > end={end}"])
        return await self._ranked(await self.repos.views.top_components(window_start, window_end, limit), "views")

    async def most_favorited(self, limit: int = TOP_COMPONENTS_LIMIT) -> List[Dict[str, object]]:
        return await self._ranked(await self.repos.favorites.top_components(limit), "favorites")
