"""
Reviews Router - leaving reviews and replying to them.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hoopcamps.auth_middleware import get_session, require_camp_owner
from hoopcamps.data.repositories import CampRepository, ReviewRepository
from hoopcamps.session import UserSession

from ..dependencies import get_camp_repository, get_notifier, get_review_repository
from ..schemas.reviews import ReplyCreateRequest, ReviewCreateRequest, ReviewReplyResponse, ReviewResponse
from ..services.notifier import Notifier
from ..services.review_service import ReviewForm, ReviewService

router = APIRouter(prefix="/api", tags=["reviews"])


def get_review_service(
    reviews: ReviewRepository = Depends(get_review_repository),
    camps: CampRepository = Depends(get_camp_repository),
    notifier: Notifier = Depends(get_notifier),
) -> ReviewService:
    return ReviewService(reviews, camps, notifier)


@router.post("/camps/{camp_id}/reviews", response_model=ReviewResponse, status_code=201)
async def leave_review(
    camp_id: str,
    body: ReviewCreateRequest,
    session: UserSession = Depends(get_session),
    service: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """Create a review pending e-mail verification."""
    review = await service.submit(
        session,
        camp_id,
        ReviewForm(
            rating=body.rating,
            review_text=body.review_text,
            participant_name=body.participant_name,
            participant_email=body.participant_email,
        ),
    )
    return ReviewResponse.from_model(review)


@router.get("/reviews/mine", response_model=list[ReviewResponse])
async def my_reviews(
    session: UserSession = Depends(get_session),
    service: ReviewService = Depends(get_review_service),
) -> list[ReviewResponse]:
    return [ReviewResponse.from_model(r) for r in await service.list_mine(session)]


@router.post("/reviews/{review_id}/replies", response_model=ReviewReplyResponse, status_code=201)
async def reply_to_review(
    review_id: str,
    body: ReplyCreateRequest,
    session: UserSession = Depends(require_camp_owner),
    service: ReviewService = Depends(get_review_service),
) -> ReviewReplyResponse:
    return ReviewReplyResponse.from_model(await service.reply(session, review_id, body.reply_text))
