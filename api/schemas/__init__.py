"""
Pydantic schemas for the camp marketplace API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .bookings import BookingCampSummary, BookingCreatedResponse, BookingCreateRequest, BookingResponse
from .camps import (
    CampDetailsResponse,
    CampImageResponse,
    CampListResponse,
    CampProfileFields,
    CampResponse,
    CampUpdateRequest,
    CountryResponse,
)
from .notifications import (
    ApprovalEmailRequest,
    EmailSentResponse,
    RejectionEmailRequest,
    ReviewVerificationRequest,
    SubmissionNotificationRequest,
)
from .profile import ProfileUpdateRequest
from .reviews import ReplyCreateRequest, ReviewCreateRequest, ReviewReplyResponse, ReviewResponse
from .submissions import (
    ApprovalResponse,
    DateRangeRequest,
    RejectRequest,
    SubmissionCreatedResponse,
    SubmissionRequest,
    SubmissionResponse,
)

__all__ = [
    # Bookings
    "BookingCampSummary",
    "BookingCreateRequest",
    "BookingCreatedResponse",
    "BookingResponse",
    # Camps
    "CampDetailsResponse",
    "CampImageResponse",
    "CampListResponse",
    "CampProfileFields",
    "CampResponse",
    "CampUpdateRequest",
    "CountryResponse",
    # Notifications
    "ApprovalEmailRequest",
    "EmailSentResponse",
    "RejectionEmailRequest",
    "ReviewVerificationRequest",
    "SubmissionNotificationRequest",
    # Profile
    "ProfileUpdateRequest",
    # Reviews
    "ReplyCreateRequest",
    "ReviewCreateRequest",
    "ReviewReplyResponse",
    "ReviewResponse",
    # Submissions
    "ApprovalResponse",
    "DateRangeRequest",
    "RejectRequest",
    "SubmissionCreatedResponse",
    "SubmissionRequest",
    "SubmissionResponse",
]
