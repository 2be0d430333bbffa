"""Notification preference audit log ORM model."""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from payment_optout_api.models.orm.base import Base


class PreferenceAuditLogORM(Base):
    """Immutable record of one effective preference change.

    Rows are only ever inserted. The id comes from a database sequence, so
    it orders entries by creation.
    """

    __tablename__ = "notification_preference_audit_logs"

    id: Mapped[int] = mapped_column(
        # SQLite only autoincrements INTEGER primary keys
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    notification_type: Mapped[str] = mapped_column(String(50), nullable=False)
    old_opted_out: Mapped[bool] = mapped_column(Boolean, nullable=False)
    new_opted_out: Mapped[bool] = mapped_column(Boolean, nullable=False)
    changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_preference_audit_user_type", "user_id", "notification_type", "id"),
        Index("idx_preference_audit_changed", "changed_at"),
    )
