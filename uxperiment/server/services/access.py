"""Premium component access rules.

A component that does not require a subscription is visible to everyone.
For premium components the rules are evaluated in order:

1. anonymous viewers are denied (``login_required``);
2. administrators are allowed;
3. the author of the component is allowed;
4. viewers holding an active subscription are allowed;
5. everyone else is denied (``subscription_required``).

An active subscription has status ACTIVE and covers the instant being
checked: ``start_date <= at`` and no end date or ``end_date > at``. The time
window is evaluated directly, so a subscription whose end date has passed
stops granting access even before ``expire_overdue`` marks it EXPIRED.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional

from uxperiment.core.database.base import utc_now
from uxperiment.core.database.entities.components import Component
from uxperiment.core.database.entities.users import User
from uxperiment.core.database.repositories import RepositoryBundle
from uxperiment.core.logging_config import get_logger

from .errors import AccessDeniedError

logger = get_logger(__name__)

# Decision reasons
PUBLIC = "public"
ADMIN = "admin"
AUTHOR = "author"
SUBSCRIBED = "subscription"
LOGIN_REQUIRED = "login_required"
SUBSCRIPTION_REQUIRED = "subscription_required"

_DENIAL_MESSAGES = {
    LOGIN_REQUIRED: "Login required to view this component",
    SUBSCRIPTION_REQUIRED: "An active subscription is required to view this component",
}


@dataclass(frozen=True)
class AccessDecision:
    """Whether a viewer may see a component, and why."""

    allowed: bool
    reason: str


def _decide_without_subscription(user: Optional[User], component: Component) -> Optional[AccessDecision]:
    """Apply every rule that does not need the subscription table."""
    if not component.requires_subscription:
        return AccessDecision(True, PUBLIC)
    if user is None:
        return AccessDecision(False, LOGIN_REQUIRED)
    if user.is_admin:
        return AccessDecision(True, ADMIN)
    if component.user_id is not None and component.user_id == user.id:
        return AccessDecision(True, AUTHOR)
    return None


class AccessService:
    """Evaluates premium access for components."""

    def __init__(self, repos: RepositoryBundle, clock: Callable[[], datetime] = utc_now) -> None:
        self.repos = repos
        self.clock = clock

    async def has_active_subscription(self, user_id: int, at: Optional[datetime] = None) -> bool:
        return await self.repos.subscriptions.has_active(user_id, at or self.clock())

    async def can_view_component(
        self, user: Optional[User], component: Component, at: Optional[datetime] = None
    ) -> AccessDecision:
        decision = _decide_without_subscription(user, component)
        if decision is not None:
            return decision
        if await self.has_active_subscription(user.id, at):
            return AccessDecision(True, SUBSCRIBED)
        return AccessDecision(False, SUBSCRIPTION_REQUIRED)

    async def decide_many(
        self, user: Optional[User], components: Iterable[Component], at: Optional[datetime] = None
    ) -> Dict[int, AccessDecision]:
        """Evaluate several components, querying subscriptions at most once."""
        decisions: Dict[int, AccessDecision] = {}
        subscribed: Optional[bool] = None
        for component in components:
            decision = _decide_without_subscription(user, component)
            if decision is None:
                if subscribed is None:
                    subscribed = await self.has_active_subscription(user.id, at)
                decision = AccessDecision(True, SUBSCRIBED) if subscribed else AccessDecision(False, SUBSCRIPTION_REQUIRED)
            decisions[component.id] = decision
        return decisions

    async def ensure_can_view(
        self, user: Optional[User], component: Component, at: Optional[datetime] = None
    ) -> AccessDecision:
        """Like ``can_view_component`` but raise ``AccessDeniedError`` on denial."""
        decision = await self.can_view_component(user, component, at)
        if not decision.allowed:
            logger.debug(
                f"Access to component {component.id} denied for user "
                f"{user.id if user else 'anonymous'}: {decision.reason}"
            )
            raise AccessDeniedError(_DENIAL_MESSAGES[decision.reason], reason=decision.reason)
        return decision
