"""Repositories package."""

from payment_optout_api.repositories.base import BaseRepository
from payment_optout_api.repositories.notification_preference_repository import (
    NotificationPreferenceRepository,
)
from payment_optout_api.repositories.preference_audit_repository import (
    PreferenceAuditRepository,
)

__all__ = [
    "BaseRepository",
    "NotificationPreferenceRepository",
    "PreferenceAuditRepository",
]
