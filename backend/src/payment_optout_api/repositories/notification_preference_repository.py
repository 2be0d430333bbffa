"""Notification preference repository."""

from sqlalchemy import select

from payment_optout_api.models.domain.notification_category import NotificationCategory
from payment_optout_api.models.orm.notification_preference import NotificationPreferenceORM
from payment_optout_api.repositories.base import BaseRepository


class NotificationPreferenceRepository(BaseRepository[NotificationPreferenceORM]):
    """Repository for notification preference operations."""

    model = NotificationPreferenceORM

    async def get_by_user_id(self, user_id: str) -> list[NotificationPreferenceORM]:
        """Get all stored preferences for a user in a single statement.

        Args:
            user_id: User identifier

        Returns:
            List of NotificationPreferenceORM, possibly empty
        """
        result = await self.session.execute(
            select(NotificationPreferenceORM)
            .where(NotificationPreferenceORM.user_id == user_id)
            .order_by(NotificationPreferenceORM.notification_type)
        )
        return list(result.scalars().all())

    async def get_by_user_and_category(
        self,
        user_id: str,
        category: NotificationCategory,
        for_update: bool = False,
    ) -> NotificationPreferenceORM | None:
        """Get a specific preference.

        Args:
            user_id: User identifier
            category: Notification category
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            NotificationPreferenceORM or None
        """
        query = (
            select(NotificationPreferenceORM)
            .where(NotificationPreferenceORM.user_id == user_id)
            .where(NotificationPreferenceORM.notification_type == category.value)
        )
        if for_update:
            query = query.with_for_update()

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_opted_out(self, user_id: str, category: NotificationCategory) -> bool | None:
        """Get only the stored flag for a preference.

        Args:
            user_id: User identifier
            category: Notification category

        Returns:
            Stored opted_out value, or None when no row exists
        """
        result = await self.session.execute(
            select(NotificationPreferenceORM.opted_out)
            .where(NotificationPreferenceORM.user_id == user_id)
            .where(NotificationPreferenceORM.notification_type == category.value)
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        user_id: str,
        category: NotificationCategory,
        opted_out: bool,
        existing: NotificationPreferenceORM | None = None,
    ) -> NotificationPreferenceORM:
        """Create or update a preference.

        Args:
            user_id: User identifier
            category: Notification category
            opted_out: New opted-out flag
            existing: Row already loaded (and locked) by the caller, if any

        Returns:
            Created or updated NotificationPreferenceORM

        Raises:
            IntegrityError: If another transaction inserted the same key first
        """
        if existing is not None:
            existing.opted_out = opted_out
            await self.session.flush()
            return existing

        return await self.create(
            user_id=user_id,
            notification_type=category.value,
            opted_out=opted_out,
        )
