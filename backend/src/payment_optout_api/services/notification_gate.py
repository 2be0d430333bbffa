"""Notification suppression decisions for the payment event pipeline."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payment_optout_api.exceptions import StorageFailureError
from payment_optout_api.models.domain.notification_category import (
    NotificationCategory,
    parse_category,
)
from payment_optout_api.repositories.notification_preference_repository import (
    NotificationPreferenceRepository,
)
from payment_optout_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)


class NotificationGate:
    """Read-only check whether a user still receives a notification category."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        """Initialize notification gate.

        Args:
            session_maker: Factory for short-lived read sessions
        """
        self.session_maker = session_maker

    async def is_notification_allowed(
        self,
        user_id: str,
        category: NotificationCategory | str,
    ) -> bool:
        """Decide whether a notification may be sent.

        Args:
            user_id: User identifier
            category: Notification category or its string value

        Returns:
            False only when the user has opted out of the category

        Raises:
            InvalidArgumentError: If category is unknown
            StorageFailureError: If the lookup fails
        """
        resolved = parse_category(category)

        try:
            async with self.session_maker() as session:
                opted_out = await NotificationPreferenceRepository(session).get_opted_out(
                    user_id, resolved
                )
        except SQLAlchemyError as e:
            log_error(logger, "Failed to look up notification preference", e)
            raise StorageFailureError("notification gate lookup") from e

        if opted_out is None:
            return True
        return not opted_out
