"""Notification category domain model."""

from enum import StrEnum

from payment_optout_api.exceptions import UnknownCategoryError


class NotificationCategory(StrEnum):
    """Payment notification categories tracked for opt-out.

    Member order is the order of every preference view returned to callers.
    """

    PAYMENT_SUCCESS = "payment_success"
    PAYMENT_FAILURE = "payment_failure"
    PAYMENT_REFUND = "payment_refund"


ALL_CATEGORIES: tuple[NotificationCategory, ...] = tuple(NotificationCategory)


def parse_category(value: object) -> NotificationCategory:
    """Resolve a category from an enum member or its string value.

    Args:
        value: Candidate category

    Returns:
        Matching NotificationCategory

    Raises:
        UnknownCategoryError: If value is not a known category
    """
    if isinstance(value, NotificationCategory):
        return value
    if isinstance(value, str):
        try:
            return NotificationCategory(value)
        except ValueError:
            pass
    raise UnknownCategoryError(value)
