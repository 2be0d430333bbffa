"""Dependency injection factories for FastAPI."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payment_optout_api.config import get_settings
from payment_optout_api.database import get_session_maker
from payment_optout_api.services.preference_service import PreferenceService


def get_preference_service(
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
) -> PreferenceService:
    """Get PreferenceService instance."""
    return PreferenceService(
        session_maker,
        max_attempts=get_settings().preference_write_max_attempts,
    )
