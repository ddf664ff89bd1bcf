"""
Subscription Plan Endpoints.

The plan catalogue is public; administrators manage it.
"""

from typing import List

from fastapi import APIRouter, status

from uxperiment.core.models.io.common import MessageResponse
from uxperiment.core.models.io.plans import PlanCreate, PlanRead, PlanUpdate
from uxperiment.server.core.security import AdminUserDep
from uxperiment.server.services.deps import PlanServiceDep
from uxperiment.server.services.plans import to_plan_read

router = APIRouter(tags=["plans"])


@router.get(
    "",
    response_model=List[PlanRead],
    summary="List Plans",
    description="Subscription plans ordered by price, cheapest first.",
)
async def list_plans(plans: PlanServiceDep, only_active: bool = False) -> List[PlanRead]:
    """
    List plans.

    - **only_active**: Hide plans that are no longer offered.
    """
    return [to_plan_read(plan) for plan in await plans.list(only_active=only_active)]


@router.get(
    "/{plan_id}",
    response_model=PlanRead,
    summary="Get Plan",
    responses={404: {"description": "Plan not found"}},
)
async def get_plan(plan_id: int, plans: PlanServiceDep) -> PlanRead:
    return to_plan_read(await plans.get(plan_id))


@router.post(
    "",
    response_model=PlanRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Plan",
    description="Add a subscription plan.",
)
async def create_plan(data: PlanCreate, _: AdminUserDep, plans: PlanServiceDep) -> PlanRead:
    """
    Create a plan.

    - **price**: Non-negative price; 0 makes a free plan.
    - **duration**: Length in days (default 30); 0 means it never expires.
    - **features**: Feature descriptions shown on the pricing page.
    - **discount**: Optional discount percentage (0-100).
    """
    return to_plan_read(await plans.create(data))


@router.patch(
    "/{plan_id}",
    response_model=PlanRead,
    summary="Update Plan",
    responses={404: {"description": "Plan not found"}},
)
async def update_plan(plan_id: int, data: PlanUpdate, _: AdminUserDep, plans: PlanServiceDep) -> PlanRead:
    return to_plan_read(await plans.update(plan_id, data))


@router.patch(
    "/{plan_id}/toggle",
    response_model=PlanRead,
    summary="Toggle Plan",
    description="Flip whether the plan is offered for new subscriptions.",
    responses={404: {"description": "Plan not found"}},
)
async def toggle_plan(plan_id: int, _: AdminUserDep, plans: PlanServiceDep) -> PlanRead:
    return to_plan_read(await plans.toggle(plan_id))


@router.delete(
    "/{plan_id}",
    response_model=MessageResponse,
    summary="Delete Plan",
    responses={
        404: {"description": "Plan not found"},
        409: {"description": "Plan is referenced by subscriptions"},
    },
)
async def delete_plan(plan_id: int, _: AdminUserDep, plans: PlanServiceDep) -> MessageResponse:
    return MessageResponse(message=await plans.delete(plan_id))
