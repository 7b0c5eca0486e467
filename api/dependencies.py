"""
Shared dependencies for the HoopCamps API.

This module provides:
- PocketBase client management (global instance authenticated as superuser)
- Repository, storage and notifier factories used as FastAPI dependencies
"""

from __future__ import annotations

import asyncio
import logging

from pocketbase import PocketBase

from hoopcamps.data.repositories import (
    BookingRepository,
    CampRepository,
    CountryRepository,
    ProfileRepository,
    ReviewRepository,
    SubmissionRepository,
)
from hoopcamps.storage import ImageStorage
from hoopcamps.validation import SubmissionLimits

from .services.notifier import Notifier
from .settings import get_settings

logger = logging.getLogger(__name__)

# ========================================
# PocketBase Client
# ========================================

# One shared client, authenticated as superuser on startup. User identity
# never lives in its authStore; it travels in the per-request UserSession.
_settings = get_settings()
pb_url = _settings.pocketbase_url
pb = PocketBase(pb_url)


class AuthState:
    """Shared state object for auth middleware and PocketBase client."""

    pb_client: PocketBase | None = None


auth_state = AuthState()


async def authenticate_pb() -> None:
    """Authenticate with PocketBase as superuser."""
    settings = get_settings()
    try:
        await asyncio.to_thread(
            pb.collection("_superusers").auth_with_password,
            settings.pocketbase_admin_email,
            settings.pocketbase_admin_password,
        )
        auth_state.pb_client = pb
        logger.info("Successfully authenticated with PocketBase")
    except Exception as e:
        logger.error(f"Failed to authenticate with PocketBase: {e}")
        raise


# ========================================
# Repositories and collaborators
# ========================================


def get_submission_repository() -> SubmissionRepository:
    return SubmissionRepository(pb)


def get_camp_repository() -> CampRepository:
    return CampRepository(pb)


def get_review_repository() -> ReviewRepository:
    return ReviewRepository(pb)


def get_booking_repository() -> BookingRepository:
    return BookingRepository(pb)


def get_profile_repository() -> ProfileRepository:
    return ProfileRepository(pb)


def get_country_repository() -> CountryRepository:
    return CountryRepository(pb)


def get_image_storage() -> ImageStorage:
    return ImageStorage(pb, bucket=get_settings().storage_bucket)


def get_notifier() -> Notifier:
    settings = get_settings()
    return Notifier(settings.functions_url, secret=settings.functions_secret)


def get_submission_limits() -> SubmissionLimits:
    return SubmissionLimits.from_settings(get_settings())


__all__ = [
    "pb",
    "pb_url",
    "auth_state",
    "authenticate_pb",
    "get_submission_repository",
    "get_camp_repository",
    "get_review_repository",
    "get_booking_repository",
    "get_profile_repository",
    "get_country_repository",
    "get_image_storage",
    "get_notifier",
    "get_submission_limits",
]
