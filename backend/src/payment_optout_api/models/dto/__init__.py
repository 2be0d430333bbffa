"""Data Transfer Objects package."""

from payment_optout_api.models.dto.preference import (
    NotificationPreferenceItem,
    NotificationPreferencesResponse,
    NotificationPreferenceUpdate,
    NotificationPreferenceUpdateResponse,
)

__all__ = [
    "NotificationPreferenceItem",
    "NotificationPreferencesResponse",
    "NotificationPreferenceUpdate",
    "NotificationPreferenceUpdateResponse",
]
