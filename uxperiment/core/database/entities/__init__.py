"""
Database entity models.

This package contains all database entity models organized by business domain.
Each module represents a single database table and its related logic.

Modules:
- users: Marketplace accounts
- plans: Subscription plans
- subscriptions: User subscriptions to plans
- payments: Payments collected for subscriptions
- components: CSS/HTML components
- favorites: User bookmarks on components
- component_views: Component preview log
- statistics: Daily statistics buckets
- site_settings: Site key/value settings
"""

from . import (
    component_views,
    components,
    favorites,
    payments,
    plans,
    site_settings,
    statistics,
    subscriptions,
    users,
)
from .component_views import ComponentView
from .components import Component
from .favorites import Favorite
from .payments import Payment, PaymentStatus
from .plans import Plan
from .site_settings import Setting
from .statistics import DailyStatistics
from .subscriptions import Subscription, SubscriptionStatus
from .users import User, UserRole, UserStatus

__all__ = [
    "Component",
    "ComponentView",
    "DailyStatistics",
    "Favorite",
    "Payment",
    "PaymentStatus",
    "Plan",
    "Setting",
    "Subscription",
    "SubscriptionStatus",
    "User",
    "UserRole",
    "UserStatus",
    "component_views",
    "components",
    "favorites",
    "payments",
    "plans",
    "site_settings",
    "statistics",
    "subscriptions",
    "users",
]
