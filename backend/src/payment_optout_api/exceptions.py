"""Domain-specific exceptions for the payment opt-out API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers.
"""

from typing import Any


class PaymentOptOutError(Exception):
    """Base exception for all payment opt-out API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class InvalidArgumentError(PaymentOptOutError):
    """Raised when caller input is rejected before any storage access."""

    pass


class UnknownCategoryError(InvalidArgumentError):
    """Raised when a notification category is not part of the known set."""

    def __init__(self, category: object) -> None:
        super().__init__("Unknown notification type", {"type": str(category)})


class InvalidOptOutValueError(InvalidArgumentError):
    """Raised when the opted-out flag is not a boolean."""

    def __init__(self, value: object) -> None:
        super().__init__("Invalid optedOut value", {"value_type": type(value).__name__})


# =============================================================================
# Storage Errors (500)
# =============================================================================


class StorageFailureError(PaymentOptOutError):
    """Raised when a unit of work could not commit.

    No partial effect is visible. Callers may retry after confirming the
    current state with a read.
    """

    def __init__(self, operation: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Storage failure during {operation}", details)
        self.operation = operation


class PreferenceConflictError(PaymentOptOutError):
    """Raised on a uniqueness collision between concurrent first inserts.

    Handled inside the preference service by retrying the unit of work.
    """

    def __init__(self, user_id: str, category: str) -> None:
        super().__init__(
            "Concurrent preference write",
            {"user_id": user_id, "type": category},
        )
