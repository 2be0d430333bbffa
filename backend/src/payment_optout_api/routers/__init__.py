"""API routers package."""

from payment_optout_api.routers import notification_preferences

__all__ = [
    "notification_preferences",
]
