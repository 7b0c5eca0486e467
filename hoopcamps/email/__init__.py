"""E-mail rendering and delivery."""

from .renderer import (
    RenderedEmail,
    camp_approval_email,
    camp_rejection_email,
    render_email,
    review_verification_email,
    submission_notification_email,
)
from .resend import ResendClient

__all__ = [
    "RenderedEmail",
    "ResendClient",
    "camp_approval_email",
    "camp_rejection_email",
    "render_email",
    "review_verification_email",
    "submission_notification_email",
]
