"""Review repository for data access.

Handles reviews and review_replies."""

from __future__ import annotations

import logging
from typing import Any

from pocketbase import PocketBase

from ...errors import NotFoundError
from ...models import Review, ReviewReply, ReviewStatus
from ..pocketbase_helpers import any_of, call_store, get_field, quote, to_datetime

logger = logging.getLogger(__name__)

REVIEWS = "reviews"
REVIEW_REPLIES = "review_replies"


class ReviewRepository:
    """Repository for reviews and replies"""

    def __init__(self, pb_client: PocketBase) -> None:
        self.pb = pb_client

    async def create(
        self,
        camp_id: str,
        user_id: str,
        participant_name: str,
        participant_email: str,
        rating: int,
        review_text: str,
        verification_token: str,
    ) -> Review:
        record = await call_store(
            self.pb.collection(REVIEWS).create,
            {
                "camp_id": camp_id,
                "user_id": user_id,
                "participant_name": participant_name,
                "participant_email": participant_email,
                "rating": rating,
                "review_text": review_text,
                "verification_token": verification_token,
                "status": ReviewStatus.PENDING_EMAIL_VERIFICATION.value,
            },
        )
        logger.info(f"Created review {record.id} for camp {camp_id} (pending e-mail verification)")
        return self._map_from_db(record)

    async def get(self, review_id: str) -> Review:
        try:
            record = await call_store(self.pb.collection(REVIEWS).get_one, review_id)
        except NotFoundError as e:
            raise NotFoundError("Review not found") from e
        return self._map_from_db(record)

    async def list_published_for_camp(self, camp_id: str) -> list[Review]:
        records = await call_store(
            self.pb.collection(REVIEWS).get_full_list,
            query_params={
                "filter": f"camp_id = {quote(camp_id)} && status = {quote(ReviewStatus.PUBLISHED.value)}",
                "sort": "-created",
            },
        )
        reviews = [self._map_from_db(r) for r in records]
        await self._attach_replies(reviews)
        return reviews

    async def list_for_user(self, user_id: str) -> list[Review]:
        records = await call_store(
            self.pb.collection(REVIEWS).get_full_list,
            query_params={"filter": f"user_id = {quote(user_id)}", "sort": "-created"},
        )
        return [self._map_from_db(r) for r in records]

    async def list_for_camps(self, camp_ids: list[str]) -> list[Review]:
        if not camp_ids:
            return []
        records = await call_store(
            self.pb.collection(REVIEWS).get_full_list,
            query_params={"filter": any_of("camp_id", camp_ids), "sort": "-created"},
        )
        reviews = [self._map_from_db(r) for r in records]
        await self._attach_replies(reviews)
        return reviews

    async def add_reply(self, review_id: str, camp_owner_id: str, reply_text: str) -> ReviewReply:
        record = await call_store(
            self.pb.collection(REVIEW_REPLIES).create,
            {"review_id": review_id, "camp_owner_id": camp_owner_id, "reply_text": reply_text},
        )
        logger.info(f"Owner {camp_owner_id} replied to review {review_id}")
        return _reply_from_db(record)

    async def _attach_replies(self, reviews: list[Review]) -> None:
        if not reviews:
            return
        records = await call_store(
            self.pb.collection(REVIEW_REPLIES).get_full_list,
            query_params={"filter": any_of("review_id", [r.id for r in reviews]), "sort": "created"},
        )
        by_review: dict[str, list[ReviewReply]] = {}
        for record in records:
            reply = _reply_from_db(record)
            by_review.setdefault(reply.review_id, []).append(reply)
        for review in reviews:
            review.replies = by_review.get(review.id, [])

    def _map_from_db(self, record: Any) -> Review:
        return Review(
            id=str(record.id),
            camp_id=get_field(record, "camp_id", ""),
            user_id=get_field(record, "user_id", ""),
            participant_name=get_field(record, "participant_name", ""),
            participant_email=get_field(record, "participant_email", ""),
            rating=int(get_field(record, "rating", 0)),
            review_text=get_field(record, "review_text", ""),
            verification_token=get_field(record, "verification_token", ""),
            status=ReviewStatus(get_field(record, "status", ReviewStatus.PENDING_EMAIL_VERIFICATION.value)),
            verified_at=to_datetime(get_field(record, "verified_at")),
            created=to_datetime(get_field(record, "created")),
        )


def _reply_from_db(record: Any) -> ReviewReply:
    return ReviewReply(
        id=str(record.id),
        review_id=get_field(record, "review_id", ""),
        camp_owner_id=get_field(record, "camp_owner_id", ""),
        reply_text=get_field(record, "reply_text", ""),
        created=to_datetime(get_field(record, "created")),
    )
