"""Data repositories for HoopCamps.

Provides database access layer for all entities."""

from __future__ import annotations

from .booking_repository import BookingRepository
from .camp_repository import CampRepository, build_listing_filter
from .profile_repository import CountryRepository, ProfileRepository
from .review_repository import ReviewRepository
from .submission_repository import SubmissionRepository

__all__ = [
    "BookingRepository",
    "CampRepository",
    "CountryRepository",
    "ProfileRepository",
    "ReviewRepository",
    "SubmissionRepository",
    "build_listing_filter",
]
