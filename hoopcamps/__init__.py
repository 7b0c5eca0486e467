"""
HoopCamps - Core business logic for the basketball camp marketplace.

This package contains:
- models: Domain models (CampSubmission, Camp, Review, etc.)
- validation: Submission and camp edit rules
- compensation: Compensating writes for multi-record operations
- storage: Camp image bucket on top of PocketBase file storage
- data.repositories: PocketBase data access per collection
- navigation: Named routes with session guards
- email: Template rendering and transactional e-mail delivery
"""

from hoopcamps.errors import (
    AccessDeniedError,
    DashboardTimeoutError,
    FanOutError,
    HoopCampsError,
    InvalidTransitionError,
    NotFoundError,
    NotificationError,
    StoreError,
    SubmissionValidationError,
    ValidationFailed,
)
from hoopcamps.models import (
    Camp,
    CampSubmission,
    Gender,
    ReviewStatus,
    SubmissionStatus,
    UserType,
)

__all__ = [
    "AccessDeniedError",
    "Camp",
    "CampSubmission",
    "DashboardTimeoutError",
    "FanOutError",
    "Gender",
    "HoopCampsError",
    "InvalidTransitionError",
    "NotFoundError",
    "NotificationError",
    "ReviewStatus",
    "StoreError",
    "SubmissionStatus",
    "SubmissionValidationError",
    "UserType",
    "ValidationFailed",
]
