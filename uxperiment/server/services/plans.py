"""Subscription plan management."""

from decimal import ROUND_HALF_UP, Decimal
from typing import List

from uxperiment.core.database.entities.plans import Plan
from uxperiment.core.database.repositories import RepositoryBundle
from uxperiment.core.logging_config import get_logger
from uxperiment.core.models.io.plans import PlanCreate, PlanRead, PlanUpdate

from .errors import ConflictError, NotFoundError

logger = get_logger(__name__)


def effective_price(plan: Plan) -> Decimal:
    """Price after the plan discount, rounded to cents."""
    price = Decimal(plan.price)
    if plan.discount:
        price = price * (Decimal(100) - Decimal(plan.discount)) / Decimal(100)
    return price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def to_plan_read(plan: Plan) -> PlanRead:
    return PlanRead(
        id=plan.id,
        name=plan.name,
        description=plan.description,
        price=plan.price,
        effective_price=effective_price(plan),
        duration_days=plan.duration_days,
        features=plan.get_features_list(),
        is_active=plan.is_active,
        discount=plan.discount,
        created_at=plan.created_at,
        updated_at=plan.updated_at,
    )


class PlanService:
    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def list(self, only_active: bool = False) -> List[Plan]:
        return await self.repos.plans.list_by_price(only_active=only_active)

    async def get(self, plan_id: int) -> Plan:
        plan = await self.repos.plans.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Plan {plan_id} not found")
        return plan

    async def create(self, data: PlanCreate) -> Plan:
        plan = Plan(
            name=data.name,
            description=data.description,
            price=Decimal(str(data.price)),
            duration_days=data.duration,
            is_active=data.is_active,
            discount=data.discount,
        )
        plan.set_features_list(data.features)
        plan = await self.repos.plans.create(plan)
        logger.info(f"Created plan {plan.id} ({plan.name})")
        return plan

    async def update(self, plan_id: int, data: PlanUpdate) -> Plan:
        plan = await self.get(plan_id)
        changes = data.model_dump(exclude_unset=True)
        if "features" in changes:
            plan.set_features_list(changes.pop("features") or [])
        if "duration" in changes:
            duration = changes.pop("duration")
            if duration is not None:
                plan.duration_days = duration
        if changes.get("price") is not None:
            plan.price = Decimal(str(changes.pop("price")))
        for field, value in changes.items():
            if value is None and field != "discount":
                continue
            setattr(plan, field, value)
        return await self.repos.plans.update(plan)

    async def toggle(self, plan_id: int) -> Plan:
        """Flip whether the plan is offered."""
        plan = await self.get(plan_id)
        plan.is_active = not plan.is_active
        plan = await self.repos.plans.update(plan)
        logger.info(f"Plan {plan.id} is now {'active' if plan.is_active else 'inactive'}")
        return plan

    async def delete(self, plan_id: int) -> str:
        plan = await self.get(plan_id)
        in_use = await self.repos.subscriptions.count_for_plan(plan_id)
        if in_use:
            raise ConflictError(f"Plan {plan_id} is referenced by {in_use} subscription(s) and cannot be deleted")
        await self.repos.plans.delete(plan.id)
        logger.info(f"Deleted plan {plan_id}")
        return f"Plan {plan_id} deleted"
