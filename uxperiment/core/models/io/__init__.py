"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- auth: Login, registration and session probing
- users: Account management
- components: Component catalogue and validation results
- favorites: User bookmarks
- plans: Subscription plans
- subscriptions: Subscriptions and payments
- statistics: Component views and analytics
- settings: Site settings
"""

from .auth import LoginRequest, RegisterRequest, SessionCheckResponse, TokenResponse
from .common import MessageResponse
from .components import (
    ComponentCreate,
    ComponentListItem,
    ComponentRead,
    ComponentSummary,
    ComponentUpdate,
    ValidationResult,
)
from .favorites import (
    FavoriteCheckResponse,
    FavoriteCreate,
    FavoriteRead,
    FavoriteToggleRequest,
    FavoriteToggleResponse,
    FavoriteWithComponent,
)
from .plans import PlanCreate, PlanRead, PlanUpdate
from .settings import SettingCreate, SettingRead, SettingUpdate
from .statistics import DailyStatisticsRead, OverviewRead, RankedComponent, ViewCreate, ViewRead
from .subscriptions import (
    ExpireResult,
    PaymentRead,
    RenewRequest,
    SubscribeRequest,
    SubscriptionAssign,
    SubscriptionRead,
    SubscriptionWithPlan,
)
from .users import UserCreate, UserRead, UserUpdate

__all__ = [
    "ComponentCreate",
    "ComponentListItem",
    "ComponentRead",
    "ComponentSummary",
    "ComponentUpdate",
    "DailyStatisticsRead",
    "ExpireResult",
    "FavoriteCheckResponse",
    "FavoriteCreate",
    "FavoriteRead",
    "FavoriteToggleRequest",
    "FavoriteToggleResponse",
    "FavoriteWithComponent",
    "LoginRequest",
    "MessageResponse",
    "OverviewRead",
    "PaymentRead",
    "PlanCreate",
    "PlanRead",
    "PlanUpdate",
    "RankedComponent",
    "RegisterRequest",
    "RenewRequest",
    "SessionCheckResponse",
    "SettingCreate",
    "SettingRead",
    "SettingUpdate",
    "SubscribeRequest",
    "SubscriptionAssign",
    "SubscriptionRead",
    "SubscriptionWithPlan",
    "TokenResponse",
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "ViewCreate",
    "ViewRead",
]
