"""
Subscription and Payment Endpoints.

Users subscribe, cancel and renew their own subscriptions; administrators
can do the same for anyone, assign explicit periods and inspect payments.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from uxperiment.core.database.entities.payments import PaymentStatus
from uxperiment.core.database.entities.subscriptions import SubscriptionStatus
from uxperiment.core.models.io.subscriptions import (
    ExpireResult,
    PaymentRead,
    RenewRequest,
    SubscribeRequest,
    SubscriptionAssign,
    SubscriptionRead,
    SubscriptionWithPlan,
)
from uxperiment.server.core.security import AdminUserDep, CurrentUserDep
from uxperiment.server.services.deps import SubscriptionServiceDep

router = APIRouter(tags=["subscriptions"])


@router.post(
    "",
    response_model=SubscriptionWithPlan,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe",
    description="Subscribe to a plan starting now.",
    responses={
        404: {"description": "Plan or user not found"},
        409: {"description": "Plan is not active"},
    },
)
async def subscribe(
    data: SubscribeRequest, user: CurrentUserDep, subscriptions: SubscriptionServiceDep
) -> SubscriptionWithPlan:
    """
    Subscribe to a plan.

    Any subscription the user currently holds is canceled. A completed
    payment of the plan's discounted price is recorded unless the plan is free.

    - **plan_id**: The plan to subscribe to.
    - **payment_method**: Free-form payment method label.
    - **user_id**: Subscribe another user (administrators only).
    """
    subscription = await subscriptions.subscribe(user, data)
    return await subscriptions.with_plan(subscription)


@router.get(
    "",
    response_model=List[SubscriptionRead],
    summary="List Subscriptions",
    description="All subscriptions, newest first (administrators only).",
)
async def list_subscriptions(
    _: AdminUserDep,
    subscriptions: SubscriptionServiceDep,
    status_filter: Optional[SubscriptionStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> List[SubscriptionRead]:
    found = await subscriptions.list(
        status=status_filter.value if status_filter else None, limit=limit, offset=offset
    )
    return [SubscriptionRead.model_validate(subscription) for subscription in found]


@router.get(
    "/me",
    response_model=SubscriptionWithPlan,
    summary="My Subscription",
    description="The caller's most recent subscription with its plan.",
    responses={404: {"description": "No subscription"}},
)
async def my_subscription(user: CurrentUserDep, subscriptions: SubscriptionServiceDep) -> SubscriptionWithPlan:
    return await subscriptions.with_plan(await subscriptions.get_current(user, user.id))


@router.post(
    "/expire",
    response_model=ExpireResult,
    summary="Expire Overdue Subscriptions",
    description="Mark ACTIVE subscriptions whose end date has passed as EXPIRED.",
)
async def expire_overdue(_: AdminUserDep, subscriptions: SubscriptionServiceDep) -> ExpireResult:
    return ExpireResult(expired=await subscriptions.expire_overdue())


@router.get(
    "/payments",
    response_model=List[PaymentRead],
    summary="List Payments",
    description="Payments newest first, optionally filtered by user and status (administrators only).",
)
async def list_payments(
    _: AdminUserDep,
    subscriptions: SubscriptionServiceDep,
    user_id: Optional[int] = None,
    status_filter: Optional[PaymentStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> List[PaymentRead]:
    found = await subscriptions.list_payments(
        user_id=user_id, status=status_filter.value if status_filter else None, limit=limit, offset=offset
    )
    return [PaymentRead.model_validate(payment) for payment in found]


@router.get(
    "/payments/me",
    response_model=List[PaymentRead],
    summary="My Payments",
)
async def my_payments(user: CurrentUserDep, subscriptions: SubscriptionServiceDep) -> List[PaymentRead]:
    return [PaymentRead.model_validate(payment) for payment in await subscriptions.list_payments(user_id=user.id)]


@router.get(
    "/users/{user_id}",
    response_model=SubscriptionWithPlan,
    summary="User Subscription",
    description="Most recent subscription of a user with its plan.",
    responses={
        403: {"description": "Not your subscription"},
        404: {"description": "No subscription"},
    },
)
async def user_subscription(
    user_id: int, user: CurrentUserDep, subscriptions: SubscriptionServiceDep
) -> SubscriptionWithPlan:
    return await subscriptions.with_plan(await subscriptions.get_current(user, user_id))


@router.post(
    "/users/{user_id}",
    response_model=SubscriptionWithPlan,
    status_code=status.HTTP_201_CREATED,
    summary="Assign Subscription",
    description="Create a subscription with an explicit period for a user (administrators only).",
    responses={
        404: {"description": "User or plan not found"},
        422: {"description": "start_date is not before end_date"},
    },
)
async def assign_subscription(
    user_id: int, data: SubscriptionAssign, _: AdminUserDep, subscriptions: SubscriptionServiceDep
) -> SubscriptionWithPlan:
    return await subscriptions.with_plan(await subscriptions.assign(user_id, data))


@router.patch(
    "/{subscription_id}/cancel",
    response_model=SubscriptionRead,
    summary="Cancel Subscription",
    responses={
        404: {"description": "Subscription not found"},
        409: {"description": "Already canceled"},
    },
)
async def cancel_subscription(
    subscription_id: int, user: CurrentUserDep, subscriptions: SubscriptionServiceDep
) -> SubscriptionRead:
    return SubscriptionRead.model_validate(await subscriptions.cancel(user, subscription_id))


@router.patch(
    "/{subscription_id}/renew",
    response_model=SubscriptionWithPlan,
    summary="Renew Subscription",
    description="Extend a subscription from its end date, or from now if it already ended.",
    responses={404: {"description": "Subscription not found"}},
)
async def renew_subscription(
    subscription_id: int,
    user: CurrentUserDep,
    subscriptions: SubscriptionServiceDep,
    data: Optional[RenewRequest] = None,
) -> SubscriptionWithPlan:
    """
    Renew a subscription.

    - **duration**: Days to add; defaults to the plan's duration.

    The subscription becomes ACTIVE again and a payment is recorded for paid plans.
    """
    renewed = await subscriptions.renew(user, subscription_id, data or RenewRequest())
    return await subscriptions.with_plan(renewed)
