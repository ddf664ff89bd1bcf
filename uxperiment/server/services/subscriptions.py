"""Subscriptions and payments.

Subscribing starts a new period immediately, cancels any subscription the
user currently holds and records a COMPLETED payment of the plan's
discounted price (free plans produce no payment). Overdue subscriptions are
marked EXPIRED by ``expire_overdue``.
"""

import uuid
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from uxperiment.core.database.base import utc_now
from uxperiment.core.database.entities.payments import Payment, PaymentStatus
from uxperiment.core.database.entities.plans import Plan
from uxperiment.core.database.entities.subscriptions import Subscription, SubscriptionStatus
from uxperiment.core.database.entities.users import User
from uxperiment.core.database.repositories import RepositoryBundle
from uxperiment.core.logging_config import get_logger
from uxperiment.core.models.io.subscriptions import (
    RenewRequest,
    SubscribeRequest,
    SubscriptionAssign,
    SubscriptionWithPlan,
)

from .errors import AccessDeniedError, ConflictError, NotFoundError, ValidationFailedError
from .plans import effective_price, to_plan_read

logger = get_logger(__name__)


def _new_transaction_id() -> str:
    return uuid.uuid4().hex


def ensure_owner_or_admin(actor: User, user_id: int) -> None:
    if actor.id != user_id and not actor.is_admin:
        raise AccessDeniedError("You can only manage your own subscriptions")


class SubscriptionService:
    """Business logic for subscriptions and the payments they produce."""

    def __init__(self, repos: RepositoryBundle, clock: Callable[[], datetime] = utc_now) -> None:
        self.repos = repos
        self.clock = clock

    async def _get_plan(self, plan_id: int) -> Plan:
        plan = await self.repos.plans.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Plan {plan_id} not found")
        return plan

    async def _get_user(self, user_id: int) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def _get(self, subscription_id: int) -> Subscription:
        subscription = await self.repos.subscriptions.get_by_id(subscription_id)
        if subscription is None:
            raise NotFoundError(f"Subscription {subscription_id} not found")
        return subscription

    async def _stage_expired(self, now: datetime) -> int:
        overdue = await self.repos.subscriptions.list_overdue(now)
        for subscription in overdue:
            subscription.status = SubscriptionStatus.EXPIRED.value
            await self.repos.subscriptions.stage(subscription)
        return len(overdue)

    async def _stage_cancel_active(self, user_id: int, now: datetime, keep: Optional[int] = None) -> None:
        for current in await self.repos.subscriptions.list_with_status(user_id, SubscriptionStatus.ACTIVE.value):
            if current.id == keep:
                continue
            current.status = SubscriptionStatus.CANCELED.value
            current.cancel_date = now
            await self.repos.subscriptions.stage(current)
            logger.info(f"Canceled subscription {current.id} of user {user_id} in favour of another one")

    async def _stage_payment(
        self, user_id: int, subscription: Subscription, plan: Plan, payment_method: Optional[str], now: datetime
    ) -> Optional[Payment]:
        if plan.is_free:
            return None
        payment = Payment(
            user_id=user_id,
            subscription_id=subscription.id,
            amount=effective_price(plan),
            status=PaymentStatus.COMPLETED.value,
            payment_method=payment_method,
            transaction_id=subscription.transaction_id or _new_transaction_id(),
            payment_date=now,
        )
        return await self.repos.payments.stage(payment)

    async def subscribe(self, actor: User, data: SubscribeRequest) -> Subscription:
        """Start a subscription to a plan for the caller (or, for admins, another user)."""
        user_id = data.user_id if data.user_id is not None else actor.id
        if user_id != actor.id:
            if not actor.is_admin:
                raise AccessDeniedError("Only administrators can subscribe other users")
            await self._get_user(user_id)

        plan = await self._get_plan(data.plan_id)
        if not plan.is_active:
            raise ConflictError(f"Plan {plan.id} is not available for new subscriptions")

        now = self.clock()
        await self._stage_expired(now)
        await self._stage_cancel_active(user_id, now)

        subscription = Subscription(
            user_id=user_id,
            plan_id=plan.id,
            start_date=now,
            end_date=None if plan.is_unlimited else now + timedelta(days=plan.duration_days),
            status=SubscriptionStatus.ACTIVE.value,
            payment_method=data.payment_method,
            transaction_id=_new_transaction_id(),
        )
        await self.repos.subscriptions.stage(subscription)
        await self._stage_payment(user_id, subscription, plan, data.payment_method, now)
        await self.repos.commit()
        logger.info(f"User {user_id} subscribed to plan {plan.id} (subscription {subscription.id})")
        return subscription

    async def assign(self, user_id: int, data: SubscriptionAssign) -> Subscription:
        """Create a subscription with an explicit period (administrative)."""
        await self._get_user(user_id)
        plan = await self._get_plan(data.plan_id)
        if data.start_date >= data.end_date:
            raise ValidationFailedError("Invalid subscription period", ["start_date must be before end_date"])

        now = self.clock()
        if data.status == SubscriptionStatus.ACTIVE:
            await self._stage_cancel_active(user_id, now)
        subscription = Subscription(
            user_id=user_id,
            plan_id=plan.id,
            start_date=data.start_date.replace(tzinfo=None),
            end_date=data.end_date.replace(tzinfo=None),
            status=data.status.value,
            payment_method=data.payment_method,
            transaction_id=_new_transaction_id(),
        )
        await self.repos.subscriptions.stage(subscription)
        await self.repos.commit()
        logger.info(f"Assigned plan {plan.id} to user {user_id} (subscription {subscription.id})")
        return subscription

    async def get_current(self, actor: User, user_id: int) -> Subscription:
        """Latest subscription of a user, whatever its status."""
        ensure_owner_or_admin(actor, user_id)
        subscription = await self.repos.subscriptions.get_latest_for_user(user_id)
        if subscription is None:
            raise NotFoundError(f"User {user_id} has no subscription")
        return subscription

    async def list(
        self, status: Optional[str] = None, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Subscription]:
        return await self.repos.subscriptions.search(status=status, limit=limit, offset=offset)

    async def cancel(self, actor: User, subscription_id: int) -> Subscription:
        subscription = await self._get(subscription_id)
        ensure_owner_or_admin(actor, subscription.user_id)
        if subscription.status == SubscriptionStatus.CANCELED.value:
            raise ConflictError(f"Subscription {subscription_id} is already canceled")
        subscription.status = SubscriptionStatus.CANCELED.value
        subscription.cancel_date = self.clock()
        subscription = await self.repos.subscriptions.update(subscription)
        logger.info(f"Canceled subscription {subscription_id}")
        return subscription

    async def renew(self, actor: User, subscription_id: int, data: RenewRequest) -> Subscription:
        """Extend a subscription from its end date or now, whichever is later."""
        subscription = await self._get(subscription_id)
        ensure_owner_or_admin(actor, subscription.user_id)
        plan = await self._get_plan(subscription.plan_id)

        now = self.clock()
        days = data.duration or plan.duration_days
        if days:
            base = max(subscription.end_date or now, now)
            subscription.end_date = base + timedelta(days=days)
        else:
            subscription.end_date = None
        await self._stage_cancel_active(subscription.user_id, now, keep=subscription.id)
        subscription.status = SubscriptionStatus.ACTIVE.value
        subscription.cancel_date = None
        if data.payment_method:
            subscription.payment_method = data.payment_method

        await self.repos.subscriptions.stage(subscription)
        await self._stage_payment(subscription.user_id, subscription, plan, subscription.payment_method, now)
        await self.repos.commit()
        logger.info(f"Renewed subscription {subscription_id} until {subscription.end_date}")
        return subscription

    async def expire_overdue(self, now: Optional[datetime] = None) -> int:
        """Mark ACTIVE subscriptions whose end date has passed as EXPIRED."""
        expired = await self._stage_expired(now or self.clock())
        await self.repos.commit()
        if expired:
            logger.info(f"Expired {expired} overdue subscription(s)")
        return expired

    async def with_plan(self, subscription: Subscription) -> SubscriptionWithPlan:
        plan = await self.repos.plans.get_by_id(subscription.plan_id)
        result = SubscriptionWithPlan.model_validate(subscription)
        result.plan = to_plan_read(plan) if plan is not None else None
        return result

    async def list_payments(
        self,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Payment]:
        return await self.repos.payments.search(user_id=user_id, status=status, limit=limit, offset=offset)
