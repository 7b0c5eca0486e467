"""
API Services - Business rules for the camp marketplace.

Services sit between routers and the PocketBase repositories. Each one takes
its repositories in the constructor so tests can hand in AsyncMocks.
"""

from .booking_service import BookingForm, BookingService, build_mailto
from .listing_service import CampDetails, ListingService
from .moderation_service import ApprovalResult, ModerationService
from .notifier import Notifier
from .owner_service import OwnerOverview, OwnerService
from .review_service import ReviewForm, ReviewService
from .submission_intake import IntakeResult, SubmissionIntakeService

__all__ = [
    # Submissions
    "IntakeResult",
    "SubmissionIntakeService",
    # Moderation
    "ApprovalResult",
    "ModerationService",
    # Listing
    "CampDetails",
    "ListingService",
    # Bookings and reviews
    "BookingForm",
    "BookingService",
    "build_mailto",
    "ReviewForm",
    "ReviewService",
    # Owner dashboard
    "OwnerOverview",
    "OwnerService",
    # Outbound
    "Notifier",
]
