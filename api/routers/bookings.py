"""
Bookings Router - booking requests and the prefilled e-mail to the camp.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hoopcamps.auth_middleware import get_session
from hoopcamps.data.repositories import BookingRepository, CampRepository
from hoopcamps.session import UserSession

from ..dependencies import get_booking_repository, get_camp_repository
from ..schemas.bookings import BookingCreatedResponse, BookingCreateRequest, BookingResponse
from ..services.booking_service import BookingForm, BookingService
from ..settings import get_settings

router = APIRouter(prefix="/api", tags=["bookings"])


def get_booking_service(
    camps: CampRepository = Depends(get_camp_repository),
    bookings: BookingRepository = Depends(get_booking_repository),
) -> BookingService:
    return BookingService(camps, bookings, admin_email=get_settings().admin_email)


@router.post("/camps/{camp_id}/bookings", response_model=BookingCreatedResponse, status_code=201)
async def request_booking(
    camp_id: str,
    body: BookingCreateRequest,
    session: UserSession = Depends(get_session),
    service: BookingService = Depends(get_booking_service),
) -> BookingCreatedResponse:
    """Store a booking request and return the mailto link the client should open."""
    booking, mailto = await service.request_booking(
        session,
        camp_id,
        BookingForm(
            participant_name=body.participant_name,
            participant_age=body.participant_age,
            participant_email=body.participant_email,
            participant_phone=body.participant_phone,
            message=body.message,
        ),
    )
    return BookingCreatedResponse(booking=BookingResponse.from_model(booking), mailto=mailto)


@router.get("/bookings/mine", response_model=list[BookingResponse])
async def my_bookings(
    session: UserSession = Depends(get_session),
    service: BookingService = Depends(get_booking_service),
) -> list[BookingResponse]:
    return [BookingResponse.from_model(b) for b in await service.list_mine(session)]
