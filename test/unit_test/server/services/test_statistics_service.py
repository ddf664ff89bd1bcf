"""Unit tests for StatisticsService against a real session."""

from datetime import date, datetime

import pytest

from uxperiment.core.database.entities import DailyStatistics
from uxperiment.core.database.repositories import build_repositories
from uxperiment.server.services.statistics import StatisticsService

pytestmark = pytest.mark.asyncio

DAY = date(2025, 3, 30)
NOW = datetime(2025, 3, 31, 9, 0)


@pytest.fixture
def service(session) -> StatisticsService:
    return StatisticsService(build_repositories(session), clock=lambda: NOW)


async def test_daily_persists_bucket_once(service: StatisticsService, factory):
    await factory.view(await factory.component(), timestamp=datetime(2025, 3, 30, 10, 0))

    first = await service.daily(DAY)
    second = await service.daily(DAY)

    assert first.id is not None
    assert second.id == first.id
    assert sum(first.component_views.values()) == 1


async def test_daily_returns_bucket_stored_by_concurrent_request(
    service: StatisticsService, session, monkeypatch: pytest.MonkeyPatch
):
    lookup = service.repos.statistics.get_by_date
    calls = []

    async def racing_lookup(day: datetime):
        calls.append(day)
        if len(calls) == 1:
            # Another request stores the same day right after this lookup
            session.add(DailyStatistics(date=day, new_users=7))
            await session.commit()
            return None
        return await lookup(day)

    monkeypatch.setattr(service.repos.statistics, "get_by_date", racing_lookup)

    bucket = await service.daily(DAY)

    assert len(calls) == 2
    assert bucket.date == datetime(2025, 3, 30)
    assert bucket.new_users == 7
