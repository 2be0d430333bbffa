"""Domain models package."""

from payment_optout_api.models.domain.notification_category import (
    ALL_CATEGORIES,
    NotificationCategory,
    parse_category,
)
from payment_optout_api.models.domain.preference import (
    AuthenticatedUser,
    CategoryPreference,
    OriginMetadata,
    PreferenceChange,
)

__all__ = [
    "ALL_CATEGORIES",
    "AuthenticatedUser",
    "CategoryPreference",
    "NotificationCategory",
    "OriginMetadata",
    "PreferenceChange",
    "parse_category",
]
