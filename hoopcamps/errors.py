"""Error classes for HoopCamps.

Validation errors are raised before any write happens. Store errors wrap
failures reported by PocketBase. Fan-out errors are raised after a
multi-record operation failed part way and its compensation has run.
"""

from __future__ import annotations

from typing import Any


class HoopCampsError(Exception):
    """Base exception for all HoopCamps errors."""

    pass


class ValidationFailed(HoopCampsError):
    """Raised when user input fails a business rule."""

    pass


class SubmissionValidationError(ValidationFailed):
    """Raised when a camp submission is rejected before any write."""

    pass


class NotFoundError(HoopCampsError):
    """Raised when a record does not exist (or is not visible to the caller)."""

    pass


class AccessDeniedError(HoopCampsError):
    """Raised when the session may not perform the operation."""

    pass


class InvalidTransitionError(HoopCampsError):
    """Raised when a moderation transition is attempted from a terminal state."""

    def __init__(self, submission_id: str, current_status: str, target_status: str):
        self.submission_id = submission_id
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Submission {submission_id} is '{current_status}' and cannot become '{target_status}'"
        )


class StoreError(HoopCampsError):
    """Raised when the data store or file storage rejects a call."""

    def __init__(self, message: str, status: int | None = None, data: Any = None):
        self.status = status
        self.data = data
        super().__init__(message)


class FanOutError(StoreError):
    """Raised when a multi-record write failed after some records were written.

    Attributes:
        step: Description of the write that failed
        compensated: True when every already-written record was removed again
        leftovers: Descriptions of compensation steps that could not be undone
    """

    def __init__(self, step: str, cause: BaseException, compensated: bool, leftovers: list[str] | None = None):
        self.step = step
        self.cause = cause
        self.compensated = compensated
        self.leftovers = leftovers or []
        status = cause.status if isinstance(cause, StoreError) else None
        super().__init__(f"Failed while {step}: {cause}", status=status)


class DashboardTimeoutError(HoopCampsError):
    """Raised when the owner dashboard watchdog abandons a pending fetch."""

    def __init__(self, message: str = "Failed to load camps. Please try refreshing the page."):
        super().__init__(message)


class NotificationError(HoopCampsError):
    """Raised when the transactional e-mail provider rejects a message."""

    pass
