"""
Pydantic schemas for reviews and owner replies.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from hoopcamps.models import Review, ReviewReply


class ReviewCreateRequest(BaseModel):
    rating: int = Field(..., description="Whole number from 1 to 5")
    review_text: str
    participant_name: str | None = Field(default=None, description="Defaults to the profile name")
    participant_email: str | None = Field(default=None, description="Defaults to the account e-mail")


class ReplyCreateRequest(BaseModel):
    reply_text: str


class ReviewReplyResponse(BaseModel):
    id: str
    review_id: str
    camp_owner_id: str
    reply_text: str
    created: datetime | None = None

    @classmethod
    def from_model(cls, reply: ReviewReply) -> ReviewReplyResponse:
        return cls(
            id=reply.id,
            review_id=reply.review_id,
            camp_owner_id=reply.camp_owner_id,
            reply_text=reply.reply_text,
            created=reply.created,
        )


class ReviewResponse(BaseModel):
    """A review as shown to users. The verification token is never exposed."""

    id: str
    camp_id: str
    participant_name: str
    rating: int
    review_text: str
    status: str
    created: datetime | None = None
    replies: list[ReviewReplyResponse] = []

    @classmethod
    def from_model(cls, review: Review) -> ReviewResponse:
        return cls(
            id=review.id,
            camp_id=review.camp_id,
            participant_name=review.participant_name,
            rating=review.rating,
            review_text=review.review_text,
            status=review.status.value,
            created=review.created,
            replies=[ReviewReplyResponse.from_model(r) for r in review.replies],
        )
