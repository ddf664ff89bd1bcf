"""Unit tests for the generic SQLModel repository.

Tests repository operations with a mocked database session so the commit and
flush behaviour can be asserted without a real database.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel import select

from uxperiment.core.database.entities import Plan
from uxperiment.core.database.repositories.base import AsyncQueryBuilder
from uxperiment.core.database.repositories.plans import PlanRepository


class TestAsyncSQLModelRepository:
    @pytest.fixture
    def mock_session(self):
        """Mock async database session."""
        session = AsyncMock()
        session.add = MagicMock()
        session.commit = AsyncMock()
        session.flush = AsyncMock()
        session.refresh = AsyncMock()
        session.delete = AsyncMock()
        session.get = AsyncMock()
        return session

    @pytest.fixture
    def repository(self, mock_session):
        return PlanRepository(mock_session)

    async def test_create_commits_and_refreshes(self, repository, mock_session):
        plan = Plan(name="Pro")

        result = await repository.create(plan)

        mock_session.add.assert_called_once_with(plan)
        mock_session.commit.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(plan)
        assert result is plan

    async def test_update_commits(self, repository, mock_session):
        plan = Plan(id=1, name="Pro")

        await repository.update(plan)

        mock_session.commit.assert_awaited_once()

    async def test_delete_existing(self, repository, mock_session):
        plan = Plan(id=1, name="Pro")
        mock_session.get.return_value = plan

        assert await repository.delete(1) is True
        mock_session.delete.assert_awaited_once_with(plan)
        mock_session.commit.assert_awaited_once()

    async def test_delete_missing(self, repository, mock_session):
        mock_session.get.return_value = None

        assert await repository.delete(99) is False
        mock_session.delete.assert_not_awaited()
        mock_session.commit.assert_not_awaited()

    async def test_stage_flushes_without_commit(self, repository, mock_session):
        plan = Plan(name="Basic")

        await repository.stage(plan)

        mock_session.add.assert_called_once_with(plan)
        mock_session.flush.assert_awaited_once()
        mock_session.commit.assert_not_awaited()

    async def test_remove_flushes_without_commit(self, repository, mock_session):
        plan = Plan(id=3, name="Basic")

        await repository.remove(plan)

        mock_session.delete.assert_awaited_once_with(plan)
        mock_session.flush.assert_awaited_once()
        mock_session.commit.assert_not_awaited()


class TestAsyncQueryBuilder:
    def test_none_and_unknown_filters_are_ignored(self):
        stmt = AsyncQueryBuilder.apply_filters(select(Plan), Plan, {"name": None, "nope": 1})

        assert "WHERE" not in str(stmt)

    def test_equality_filter(self):
        stmt = AsyncQueryBuilder.apply_filters(select(Plan), Plan, {"is_active": True})

        assert "plans.is_active =" in str(stmt)

    def test_pagination(self):
        stmt = AsyncQueryBuilder.apply_pagination(select(Plan), 10, 20)

        assert "LIMIT" in str(stmt)
        assert "OFFSET" in str(stmt)


class TestListWithRealDatabase:
    async def test_list_filters_and_paginates(self, session, factory):
        await factory.plan(name="Basic", price="9.99")
        await factory.plan(name="Legacy", price="4.99", is_active=False)
        await factory.plan(name="Pro", price="19.99")
        repository = PlanRepository(session)

        active = await repository.list(filters={"is_active": True})
        page = await repository.list(limit=1, offset=1)

        assert [plan.name for plan in active] == ["Basic", "Pro"]
        assert [plan.name for plan in page] == ["Legacy"]
