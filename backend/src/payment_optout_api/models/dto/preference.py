"""Notification preference DTOs.

Field aliases keep the camelCase wire format of the public API.
"""

from typing import Any

from pydantic import BaseModel, Field

from payment_optout_api.models.domain.notification_category import NotificationCategory
from payment_optout_api.models.domain.preference import CategoryPreference


class NotificationPreferenceItem(BaseModel):
    """Opt-out state of one notification type."""

    type: NotificationCategory
    opted_out: bool = Field(alias="optedOut")

    class Config:
        """Pydantic config."""

        populate_by_name = True

    @classmethod
    def from_domain(cls, preference: CategoryPreference) -> "NotificationPreferenceItem":
        """Build from a domain CategoryPreference."""
        return cls(type=preference.category, opted_out=preference.opted_out)


class NotificationPreferencesResponse(BaseModel):
    """Full preference view response."""

    preferences: list[NotificationPreferenceItem]


class NotificationPreferenceUpdate(BaseModel):
    """Single preference update request."""

    type: str
    # Checked by the service so non-boolean values surface as 400
    opted_out: Any = Field(alias="optedOut", json_schema_extra={"type": "boolean"})

    class Config:
        """Pydantic config."""

        populate_by_name = True


class NotificationPreferenceUpdateResponse(NotificationPreferencesResponse):
    """Preference update response."""

    success: bool = True
