"""Notification preference ORM model."""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from payment_optout_api.models.orm.base import Base, TimestampMixin


class NotificationPreferenceORM(Base, TimestampMixin):
    """Per-user opt-out flag for one payment notification category.

    The composite primary key guarantees at most one row per user and
    category. A missing row means the user has not opted out.
    """

    __tablename__ = "notification_preferences"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    notification_type: Mapped[str] = mapped_column(String(50), primary_key=True)
    opted_out: Mapped[bool] = mapped_column(Boolean, nullable=False)

    __table_args__ = (
        Index("idx_notification_preferences_type", "notification_type"),
    )
