"""Security event logging for sensitive operations.

Security-relevant events are written to a dedicated ``security`` logger so
they can be routed separately from application logs.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# Longest user identifier echoed into a security event
MAX_LOGGED_USER_ID_LENGTH = 64


class SecurityEventType(str, Enum):
    """Types of security events that are logged."""

    UNAUTHORIZED_ACCESS = "unauthorized_access"
    PREFERENCE_CHANGED = "preference_changed"


security_logger = logging.getLogger("security")


def log_security_event(
    event_type: SecurityEventType,
    user_id: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """Log a security event.

    Args:
        event_type: The type of security event
        user_id: The user the event concerns, if known
        ip_address: The client IP address
        user_agent: The client user agent
        details: Additional event-specific details
        success: Whether the operation succeeded
    """
    if user_id is not None and len(user_id) > MAX_LOGGED_USER_ID_LENGTH:
        user_id = user_id[:MAX_LOGGED_USER_ID_LENGTH] + "..."

    event_data: dict[str, Any] = {
        "event_type": event_type.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "success": success,
        "actor": {
            "user_id": user_id,
            "ip_address": ip_address,
            "user_agent": user_agent,
        },
    }

    if details:
        event_data["details"] = details

    if success:
        security_logger.info(
            f"Security event: {event_type.value}",
            extra={"security_event": event_data},
        )
    else:
        security_logger.warning(
            f"Security event (failed): {event_type.value}",
            extra={"security_event": event_data},
        )
