"""Services package."""

from payment_optout_api.services.notification_gate import NotificationGate
from payment_optout_api.services.preference_service import PreferenceService

__all__ = [
    "NotificationGate",
    "PreferenceService",
]
