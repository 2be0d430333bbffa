"""Notification preference domain models."""

from pydantic import BaseModel

from payment_optout_api.models.domain.notification_category import NotificationCategory


class CategoryPreference(BaseModel):
    """Effective opt-out state of one category for one user."""

    category: NotificationCategory
    opted_out: bool = False

    class Config:
        """Pydantic config."""

        frozen = True


class OriginMetadata(BaseModel):
    """Where a preference change request came from."""

    ip_address: str | None = None
    user_agent: str | None = None


class PreferenceChange(BaseModel):
    """Outcome of a single transactional preference write."""

    category: NotificationCategory
    old_opted_out: bool
    new_opted_out: bool

    @property
    def changed(self) -> bool:
        """Whether the write altered the stored value."""
        return self.old_opted_out != self.new_opted_out


class AuthenticatedUser(BaseModel):
    """Caller identity supplied by the authentication layer."""

    id: str
