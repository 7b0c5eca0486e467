"""Reviews and owner replies.

New reviews wait in pending_email_verification with an unguessable token;
the participant gets a verification link. Nothing here publishes a review.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hoopcamps.errors import AccessDeniedError, ValidationFailed
from hoopcamps.models import Review, ReviewReply
from hoopcamps.session import UserSession

if TYPE_CHECKING:
    from hoopcamps.data.repositories import CampRepository, ReviewRepository

    from .notifier import Notifier

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


@dataclass
class ReviewForm:
    rating: int
    review_text: str
    participant_name: str | None = None
    participant_email: str | None = None


def new_verification_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


class ReviewService:
    def __init__(self, reviews: ReviewRepository, camps: CampRepository, notifier: Notifier) -> None:
        self.reviews = reviews
        self.camps = camps
        self.notifier = notifier

    async def submit(self, session: UserSession, camp_id: str, form: ReviewForm) -> Review:
        if isinstance(form.rating, bool) or not isinstance(form.rating, int) or not 1 <= form.rating <= 5:
            raise ValidationFailed("Rating must be a whole number from 1 to 5")
        text = (form.review_text or "").strip()
        if not text:
            raise ValidationFailed("Please write a review")

        camp = await self.camps.get(camp_id, approved_only=True)

        review = await self.reviews.create(
            camp_id=camp.id,
            user_id=session.user_id,
            participant_name=(form.participant_name or "").strip() or session.full_name,
            participant_email=(form.participant_email or "").strip() or session.email,
            rating=form.rating,
            review_text=text,
            verification_token=new_verification_token(),
        )

        if not await self.notifier.review_created(review.id):
            logger.warning(f"Verification e-mail for review {review.id} was not sent")
        return review

    async def list_mine(self, session: UserSession) -> list[Review]:
        """Camp owners see reviews of their camps; everyone else sees their own reviews."""
        if session.is_camp_owner:
            camps = await self.camps.list_for_owner(session.user_id)
            return await self.reviews.list_for_camps([c.id for c in camps])
        return await self.reviews.list_for_user(session.user_id)

    async def reply(self, session: UserSession, review_id: str, reply_text: str) -> ReviewReply:
        text = (reply_text or "").strip()
        if not text:
            raise ValidationFailed("Reply cannot be empty")

        review = await self.reviews.get(review_id)
        camp = await self.camps.get(review.camp_id)
        if camp.owner_id != session.user_id:
            raise AccessDeniedError("Only the camp owner can reply to this review")

        return await self.reviews.add_reply(review_id, session.user_id, text)
