"""SQLAlchemy ORM models package."""

from payment_optout_api.models.orm.base import Base
from payment_optout_api.models.orm.notification_preference import NotificationPreferenceORM
from payment_optout_api.models.orm.preference_audit_log import PreferenceAuditLogORM

__all__ = [
    "Base",
    "NotificationPreferenceORM",
    "PreferenceAuditLogORM",
]
