"""Notification preference service.

Reads return one entry per known category, filling in the default for
categories the user never changed. Writes run as a single unit of work
that updates the preference and appends its audit entry together, and
leave storage untouched when the requested value is already in effect.
"""

import logging
from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payment_optout_api.config import get_settings
from payment_optout_api.exceptions import (
    InvalidOptOutValueError,
    PreferenceConflictError,
    StorageFailureError,
)
from payment_optout_api.models.domain.notification_category import (
    ALL_CATEGORIES,
    NotificationCategory,
    parse_category,
)
from payment_optout_api.models.domain.preference import (
    CategoryPreference,
    OriginMetadata,
    PreferenceChange,
)
from payment_optout_api.models.orm.notification_preference import NotificationPreferenceORM
from payment_optout_api.repositories.notification_preference_repository import (
    NotificationPreferenceRepository,
)
from payment_optout_api.repositories.preference_audit_repository import (
    PreferenceAuditRepository,
)
from payment_optout_api.utils.secure_logging import log_error
from payment_optout_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)

DEFAULT_OPTED_OUT = False


def build_preference_view(
    records: Iterable[NotificationPreferenceORM],
) -> list[CategoryPreference]:
    """Merge stored records over the all-default preference list.

    Args:
        records: Stored preference rows of a single user

    Returns:
        One CategoryPreference per known category, in category order
    """
    stored = {record.notification_type: record.opted_out for record in records}
    return [
        CategoryPreference(
            category=category,
            opted_out=stored.get(category.value, DEFAULT_OPTED_OUT),
        )
        for category in ALL_CATEGORIES
    ]


class PreferenceService:
    """Service for reading and changing notification opt-out preferences."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        max_attempts: int | None = None,
    ) -> None:
        """Initialize preference service.

        Args:
            session_maker: Factory opening one session per unit of work
            max_attempts: Write attempts on concurrent first-insert collisions
        """
        self.session_maker = session_maker
        self.max_attempts = max_attempts or get_settings().preference_write_max_attempts

    async def get_preferences(self, user_id: str) -> list[CategoryPreference]:
        """Get the full preference view of a user.

        All stored rows are fetched with a single statement, so the view is
        one committed snapshot.

        Args:
            user_id: User identifier

        Returns:
            One CategoryPreference per known category

        Raises:
            StorageFailureError: If the read fails
        """
        try:
            async with self.session_maker() as session, session.begin():
                records = await NotificationPreferenceRepository(session).get_by_user_id(user_id)
        except SQLAlchemyError as e:
            log_error(logger, "Failed to read notification preferences", e)
            raise StorageFailureError("preference read") from e

        return build_preference_view(records)

    async def set_preference(
        self,
        user_id: str,
        category: NotificationCategory | str,
        opted_out: bool,
        origin: OriginMetadata | None = None,
    ) -> list[CategoryPreference]:
        """Set one preference and return the resulting full view.

        Args:
            user_id: User identifier
            category: Notification category or its string value
            opted_out: Requested opted-out flag
            origin: Request origin recorded in the audit entry

        Returns:
            One CategoryPreference per known category, reflecting the write

        Raises:
            InvalidArgumentError: If category or opted_out is invalid
            StorageFailureError: If the unit of work cannot commit
        """
        resolved = parse_category(category)
        # bool only; 0/1 and "true" are rejected
        if not isinstance(opted_out, bool):
            raise InvalidOptOutValueError(opted_out)
        origin = origin or OriginMetadata()

        attempt = 0
        while True:
            attempt += 1
            try:
                change = await self._commit_change(user_id, resolved, opted_out, origin)
                break
            except PreferenceConflictError as e:
                if attempt >= self.max_attempts:
                    log_error(logger, "Preference write kept colliding, giving up", e)
                    raise StorageFailureError("preference write", e.details) from e
                logger.info(
                    "Concurrent first write for %s, retrying (attempt %d of %d)",
                    resolved.value,
                    attempt + 1,
                    self.max_attempts,
                )

        if change.changed:
            logger.info(
                "Notification preference changed: type=%s opted_out=%s->%s",
                resolved.value,
                change.old_opted_out,
                change.new_opted_out,
            )
            log_security_event(
                SecurityEventType.PREFERENCE_CHANGED,
                user_id=user_id,
                ip_address=origin.ip_address,
                user_agent=origin.user_agent,
                details={
                    "type": resolved.value,
                    "old_opted_out": change.old_opted_out,
                    "new_opted_out": change.new_opted_out,
                },
            )
        else:
            logger.debug("Notification preference unchanged: type=%s", resolved.value)

        return await self.get_preferences(user_id)

    async def _commit_change(
        self,
        user_id: str,
        category: NotificationCategory,
        opted_out: bool,
        origin: OriginMetadata,
    ) -> PreferenceChange:
        """Run one write attempt in its own session and transaction."""
        try:
            async with self.session_maker() as session, session.begin():
                return await self._apply_change(session, user_id, category, opted_out, origin)
        except IntegrityError as e:
            # Only the composite key can be violated by a validated write
            raise PreferenceConflictError(user_id, category.value) from e
        except SQLAlchemyError as e:
            log_error(logger, "Failed to commit notification preference", e)
            raise StorageFailureError("preference write") from e

    async def _apply_change(
        self,
        session: AsyncSession,
        user_id: str,
        category: NotificationCategory,
        opted_out: bool,
        origin: OriginMetadata,
    ) -> PreferenceChange:
        """Compare, upsert and audit inside the caller's transaction.

        The preference row is locked before it is compared, so concurrent
        writers of the same key decide against each other's committed value.

        Args:
            session: Session with an open transaction
            user_id: User identifier
            category: Validated notification category
            opted_out: Requested opted-out flag
            origin: Request origin for the audit entry

        Returns:
            PreferenceChange with the old and new values
        """
        preferences = NotificationPreferenceRepository(session)
        existing = await preferences.get_by_user_and_category(user_id, category, for_update=True)
        current = existing.opted_out if existing is not None else DEFAULT_OPTED_OUT

        change = PreferenceChange(
            category=category,
            old_opted_out=current,
            new_opted_out=opted_out,
        )
        if not change.changed:
            return change

        await preferences.upsert(user_id, category, opted_out, existing=existing)
        await PreferenceAuditRepository(session).append(
            user_id=user_id,
            category=category,
            old_opted_out=change.old_opted_out,
            new_opted_out=change.new_opted_out,
            ip_address=origin.ip_address,
            user_agent=origin.user_agent,
        )
        return change
