"""Notification preferences router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from payment_optout_api.dependencies import get_preference_service
from payment_optout_api.models.domain.preference import AuthenticatedUser, OriginMetadata
from payment_optout_api.models.dto.preference import (
    NotificationPreferenceItem,
    NotificationPreferencesResponse,
    NotificationPreferenceUpdate,
    NotificationPreferenceUpdateResponse,
)
from payment_optout_api.security.auth import get_current_user
from payment_optout_api.security.rate_limit import (
    API_DEFAULT_LIMIT,
    PREFERENCE_WRITE_LIMIT,
    get_real_client_ip,
    limiter,
)
from payment_optout_api.services.preference_service import PreferenceService

router = APIRouter()


@router.get("/notification-preferences", response_model=NotificationPreferencesResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_notification_preferences(
    request: Request,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    preference_service: Annotated[PreferenceService, Depends(get_preference_service)],
) -> NotificationPreferencesResponse:
    """Get all payment notification preferences of the current user."""
    preferences = await preference_service.get_preferences(current_user.id)
    return NotificationPreferencesResponse(
        preferences=[NotificationPreferenceItem.from_domain(p) for p in preferences],
    )


@router.put("/notification-preferences", response_model=NotificationPreferenceUpdateResponse)
@limiter.limit(PREFERENCE_WRITE_LIMIT)
async def update_notification_preference(
    request: Request,
    body: NotificationPreferenceUpdate,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    preference_service: Annotated[PreferenceService, Depends(get_preference_service)],
) -> NotificationPreferenceUpdateResponse:
    """Update a single payment notification preference of the current user.

    Returns the full preference view after the update.
    """
    origin = OriginMetadata(
        ip_address=get_real_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    preferences = await preference_service.set_preference(
        current_user.id,
        body.type,
        body.opted_out,
        origin,
    )
    return NotificationPreferenceUpdateResponse(
        success=True,
        preferences=[NotificationPreferenceItem.from_domain(p) for p in preferences],
    )
