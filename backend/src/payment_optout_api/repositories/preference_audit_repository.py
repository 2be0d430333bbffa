"""Notification preference audit log repository.

Append-only: entries are inserted and read, never updated or deleted.
"""

from sqlalchemy import func, select
from sqlalchemy.sql.elements import ColumnElement

from payment_optout_api.models.domain.notification_category import NotificationCategory
from payment_optout_api.models.orm.preference_audit_log import PreferenceAuditLogORM
from payment_optout_api.repositories.base import BaseRepository


class PreferenceAuditRepository(BaseRepository[PreferenceAuditLogORM]):
    """Repository for preference audit log operations."""

    model = PreferenceAuditLogORM

    def _clock(self) -> ColumnElement:
        """Database clock read at insert time.

        PostgreSQL clock_timestamp() advances within a transaction, unlike now(),
        so entries written after the row lock share one clock across workers.
        """
        if self.session.get_bind().dialect.name == "postgresql":
            return func.clock_timestamp()
        return func.now()

    async def append(
        self,
        user_id: str,
        category: NotificationCategory,
        old_opted_out: bool,
        new_opted_out: bool,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> PreferenceAuditLogORM:
        """Append an audit log entry in the current transaction.

        Args:
            user_id: User identifier
            category: Notification category
            old_opted_out: Value before the change
            new_opted_out: Value after the change
            ip_address: Client IP address
            user_agent: Client user agent

        Returns:
            Created PreferenceAuditLogORM with its generated id
        """
        return await self.create(
            user_id=user_id,
            notification_type=category.value,
            old_opted_out=old_opted_out,
            new_opted_out=new_opted_out,
            changed_at=self._clock(),
            ip_address=ip_address,
            user_agent=user_agent,
        )

    async def list_for_user(
        self,
        user_id: str,
        category: NotificationCategory | None = None,
    ) -> list[PreferenceAuditLogORM]:
        """Get audit entries for a user in creation order.

        Args:
            user_id: User identifier
            category: Restrict to one category

        Returns:
            List of PreferenceAuditLogORM, oldest first
        """
        query = select(PreferenceAuditLogORM).where(PreferenceAuditLogORM.user_id == user_id)
        if category is not None:
            query = query.where(PreferenceAuditLogORM.notification_type == category.value)

        result = await self.session.execute(query.order_by(PreferenceAuditLogORM.id))
        return list(result.scalars().all())

    async def count_for_user(
        self,
        user_id: str,
        category: NotificationCategory | None = None,
    ) -> int:
        """Count audit entries for a user.

        Args:
            user_id: User identifier
            category: Restrict to one category

        Returns:
            Number of entries
        """
        query = (
            select(func.count())
            .select_from(PreferenceAuditLogORM)
            .where(PreferenceAuditLogORM.user_id == user_id)
        )
        if category is not None:
            query = query.where(PreferenceAuditLogORM.notification_type == category.value)

        result = await self.session.execute(query)
        return result.scalar_one()
