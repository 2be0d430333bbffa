"""Secure logging utilities to prevent information disclosure."""

import logging
import re
from typing import Any

from payment_optout_api.config import get_settings


def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def sanitize_exception_message(error: Exception) -> str:
    """Sanitize exception message for logging in production.

    Removes connection strings, file paths and long tokens, which database
    driver errors tend to carry.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message suitable for production logs
    """
    error_msg = str(error)

    # Connection strings first, their paths would otherwise match below
    url_pattern = r"(postgresql|postgres|sqlite|redis|http|https)(\+\w+)?://[^\s]+"
    error_msg = re.sub(url_pattern, "[URL]", error_msg)

    error_msg = re.sub(r"['\"]?(/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?", "[PATH]", error_msg)

    error_msg = re.sub(r"[a-zA-Z0-9_\-]{32,}", "[TOKEN]", error_msg)

    if len(error_msg) > 200:
        error_msg = error_msg[:197] + "..."

    return error_msg


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log an error with appropriate detail level based on environment.

    In debug mode, logs full exception details.
    In production, logs sanitized message without sensitive details.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
        **kwargs: Additional context to log (dropped outside debug mode)
    """
    if is_debug_mode():
        if error:
            logger.error(f"{message}: {error}", exc_info=error, extra=kwargs)
        else:
            logger.error(message, extra=kwargs)
    else:
        if error:
            sanitized = sanitize_exception_message(error)
            logger.error(f"{message}: {sanitized}")
        else:
            logger.error(message)
