"""
Owner Router - camp owner dashboard, camp edits and image management.

All endpoints require user_type = camp_owner; each camp operation also
checks that the caller owns the camp.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from hoopcamps.auth_middleware import require_camp_owner
from hoopcamps.data.repositories import BookingRepository, CampRepository, ReviewRepository
from hoopcamps.session import UserSession
from hoopcamps.storage import ImageStorage
from hoopcamps.validation import RawDateRange, SubmissionLimits

from ..dependencies import (
    get_booking_repository,
    get_camp_repository,
    get_image_storage,
    get_review_repository,
    get_submission_limits,
)
from ..schemas.bookings import BookingResponse
from ..schemas.camps import CampImageResponse, CampResponse, CampUpdateRequest
from ..schemas.reviews import ReviewResponse
from ..services.owner_service import OwnerService
from ..settings import get_settings
from ..utils.uploads import read_image_uploads

router = APIRouter(prefix="/api/owner", tags=["owner"])


def get_owner_service(
    camps: CampRepository = Depends(get_camp_repository),
    bookings: BookingRepository = Depends(get_booking_repository),
    reviews: ReviewRepository = Depends(get_review_repository),
    storage: ImageStorage = Depends(get_image_storage),
    limits: SubmissionLimits = Depends(get_submission_limits),
) -> OwnerService:
    return OwnerService(
        camps,
        bookings,
        reviews,
        storage,
        limits,
        dashboard_timeout=get_settings().owner_dashboard_timeout_seconds,
    )


@router.get("/camps", response_model=list[CampResponse])
async def my_camps(
    session: UserSession = Depends(require_camp_owner),
    service: OwnerService = Depends(get_owner_service),
) -> list[CampResponse]:
    """Owned camps, newest first. Returns 504 if loading exceeds the dashboard timeout."""
    return [CampResponse.from_model(c) for c in await service.list_camps(session)]


@router.get("/overview")
async def overview(
    session: UserSession = Depends(require_camp_owner),
    service: OwnerService = Depends(get_owner_service),
) -> dict[str, list]:
    data = await service.overview(session)
    return {
        "camps": [CampResponse.from_model(c) for c in data.camps],
        "bookings": [BookingResponse.from_model(b) for b in data.bookings],
        "reviews": [ReviewResponse.from_model(r) for r in data.reviews],
    }


@router.put("/camps/{camp_id}", response_model=CampResponse)
async def update_camp(
    camp_id: str,
    body: CampUpdateRequest,
    session: UserSession = Depends(require_camp_owner),
    service: OwnerService = Depends(get_owner_service),
) -> CampResponse:
    camp = await service.update_camp(
        session,
        camp_id,
        body.to_profile(),
        RawDateRange(start_date=body.start_date, end_date=body.end_date, price=body.price),
    )
    return CampResponse.from_model(camp)


@router.post("/camps/{camp_id}/images", response_model=list[CampImageResponse], status_code=201)
async def add_images(
    camp_id: str,
    images: list[UploadFile] | None = File(default=None),
    session: UserSession = Depends(require_camp_owner),
    service: OwnerService = Depends(get_owner_service),
) -> list[CampImageResponse]:
    added = await service.add_images(session, camp_id, await read_image_uploads(images))
    return [CampImageResponse.from_model(img) for img in added]


@router.delete("/camps/{camp_id}/images/{image_id}", status_code=204)
async def delete_image(
    camp_id: str,
    image_id: str,
    session: UserSession = Depends(require_camp_owner),
    service: OwnerService = Depends(get_owner_service),
) -> None:
    await service.delete_image(session, camp_id, image_id)


@router.post("/camps/{camp_id}/images/{image_id}/cover", response_model=list[CampImageResponse])
async def set_cover_image(
    camp_id: str,
    image_id: str,
    session: UserSession = Depends(require_camp_owner),
    service: OwnerService = Depends(get_owner_service),
) -> list[CampImageResponse]:
    """Move an image to order 0; the others keep their relative order."""
    return [CampImageResponse.from_model(img) for img in await service.set_cover(session, camp_id, image_id)]
