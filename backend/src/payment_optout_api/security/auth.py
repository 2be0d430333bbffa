"""Bearer token authentication stub.

The bearer token is taken as the caller's user id. Identity verification
belongs to an upstream identity system; this module only rejects requests
that carry no usable identifier.
"""

import re
from typing import Annotated, NoReturn

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from payment_optout_api.models.domain.preference import AuthenticatedUser
from payment_optout_api.security.rate_limit import get_real_client_ip
from payment_optout_api.utils.security_events import SecurityEventType, log_security_event

MAX_USER_ID_LENGTH = 255

# Printable, no whitespace or control characters
_USER_ID_PATTERN = re.compile(r"^[^\s\x00-\x1f\x7f]+$")

bearer_scheme = HTTPBearer(
    auto_error=False,
    description="Bearer token carrying the caller's user id",
)


def is_valid_user_id(user_id: str) -> bool:
    """Check that a token can be used as a user id.

    Args:
        user_id: Candidate user id

    Returns:
        True if the id is non-empty, short enough and printable
    """
    if not user_id or len(user_id) > MAX_USER_ID_LENGTH:
        return False
    return _USER_ID_PATTERN.match(user_id) is not None


def _reject(request: Request, user_id: str | None, reason: str, detail: str) -> NoReturn:
    """Log an unauthorized access attempt and raise 401."""
    log_security_event(
        SecurityEventType.UNAUTHORIZED_ACCESS,
        user_id=user_id,
        ip_address=get_real_client_ip(request),
        user_agent=request.headers.get("user-agent"),
        details={"reason": reason, "path": request.url.path},
        success=False,
    )
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> AuthenticatedUser:
    """Get the current user from the Authorization header.

    Args:
        request: Incoming request
        credentials: HTTP Bearer credentials, None when absent or not Bearer

    Returns:
        AuthenticatedUser

    Raises:
        HTTPException: 401 if the header is missing, malformed or invalid
    """
    if credentials is None:
        _reject(
            request,
            None,
            "Missing or malformed Authorization header",
            "Authentication required",
        )

    token = credentials.credentials.strip()
    if not is_valid_user_id(token):
        _reject(request, token or None, "Invalid user token", "Invalid user token")

    return AuthenticatedUser(id=token)
