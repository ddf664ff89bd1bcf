"""Shared fixtures for unit tests.

Every test gets its own in-memory SQLite database. ``StaticPool`` keeps a
single connection so the schema created by ``create_all`` stays visible to
the session under test.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import AsyncGenerator, Optional

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from uxperiment.core.database import create_all, utc_now
from uxperiment.core.database.entities import (
    Component,
    ComponentView,
    Favorite,
    Payment,
    PaymentStatus,
    Plan,
    Setting,
    Subscription,
    SubscriptionStatus,
    User,
    UserRole,
    UserStatus,
)
from uxperiment.server.core.security import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(name="engine")
async def engine_fixture():
    """Create a fresh in-memory database for one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_maker() as session:
        yield session


class DataFactory:
    """Persist entities with sensible defaults."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._counter = 0

    async def _save(self, entity):
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    async def user(
        self,
        email: Optional[str] = None,
        password: Optional[str] = None,
        role: UserRole = UserRole.USER,
        status: UserStatus = UserStatus.ACTIVE,
        name: Optional[str] = None,
        created_at: Optional[datetime] = None,
        last_login: Optional[datetime] = None,
    ) -> User:
        user = User(
            email=email or f"user{self._next()}@example.com",
            password_hash=hash_password(password) if password else None,
            name=name,
            role=role.value,
            status=status.value,
            last_login=last_login,
        )
        if created_at is not None:
            user.created_at = created_at
        return await self._save(user)

    async def admin(self, email: Optional[str] = None, password: Optional[str] = None) -> User:
        return await self.user(email=email or f"admin{self._next()}@example.com", password=password, role=UserRole.ADMIN)

    async def component(
        self,
        name: Optional[str] = None,
        requires_subscription: bool = False,
        author: Optional[User] = None,
        category: str = "Buttons",
        description: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Component:
        component = Component(
            name=name or f"Component {self._next()}",
            description=description,
            category=category,
            css_content=".btn { color: red; }",
            html_content="<button class='btn'>Click</button>",
            requires_subscription=requires_subscription,
            user_id=author.id if author else None,
        )
        if created_at is not None:
            component.created_at = created_at
        return await self._save(component)

    async def plan(
        self,
        name: str = "Pro",
        price: str = "19.99",
        duration_days: int = 30,
        discount: Optional[int] = None,
        is_active: bool = True,
        features: Optional[list] = None,
    ) -> Plan:
        plan = Plan(
            name=name,
            description=f"{name} plan",
            price=Decimal(price),
            duration_days=duration_days,
            discount=discount,
            is_active=is_active,
        )
        plan.set_features_list(features or ["Access to all components"])
        return await self._save(plan)

    async def subscription(
        self,
        user: User,
        plan: Plan,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    ) -> Subscription:
        now = utc_now()
        subscription = Subscription(
            user_id=user.id,
            plan_id=plan.id,
            start_date=start_date or now - timedelta(days=1),
            end_date=end_date if end_date is not None else now + timedelta(days=29),
            status=status.value,
        )
        return await self._save(subscription)

    async def payment(
        self,
        user: User,
        amount: str = "9.99",
        payment_date: Optional[datetime] = None,
        status: PaymentStatus = PaymentStatus.COMPLETED,
        subscription: Optional[Subscription] = None,
    ) -> Payment:
        payment = Payment(
            user_id=user.id,
            subscription_id=subscription.id if subscription else None,
            amount=Decimal(amount),
            status=status.value,
            payment_date=payment_date or utc_now(),
        )
        return await self._save(payment)

    async def favorite(self, user: User, component: Component, created_at: Optional[datetime] = None) -> Favorite:
        favorite = Favorite(user_id=user.id, component_id=component.id)
        if created_at is not None:
            favorite.created_at = created_at
        return await self._save(favorite)

    async def view(
        self,
        component: Component,
        user: Optional[User] = None,
        timestamp: Optional[datetime] = None,
        session_id: Optional[str] = None,
    ) -> ComponentView:
        view = ComponentView(
            component_id=component.id,
            user_id=user.id if user else None,
            session_id=session_id,
            timestamp=timestamp or utc_now(),
        )
        return await self._save(view)

    async def setting(self, section: str, key: str, value: str) -> Setting:
        return await self._save(Setting(section=section, key=key, value=value))


@pytest_asyncio.fixture(name="factory")
async def factory_fixture(session: AsyncSession) -> DataFactory:
    return DataFactory(session)
