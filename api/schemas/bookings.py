"""
Pydantic schemas for booking requests.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from hoopcamps.models import BookingRequest


class BookingCreateRequest(BaseModel):
    participant_name: str
    participant_age: int | str = Field(..., description="Positive whole number")
    participant_email: str
    participant_phone: str = ""
    message: str = ""


class BookingCampSummary(BaseModel):
    id: str
    camp_name: str
    location: str
    start_date: date
    end_date: date
    price: float


class BookingResponse(BaseModel):
    id: str
    camp_id: str
    participant_name: str
    participant_age: int
    participant_email: str
    participant_phone: str
    message: str
    created: datetime | None = None
    camp: BookingCampSummary | None = None

    @classmethod
    def from_model(cls, booking: BookingRequest) -> BookingResponse:
        camp = None
        if booking.camp is not None:
            camp = BookingCampSummary(
                id=booking.camp.id,
                camp_name=booking.camp.profile.camp_name,
                location=booking.camp.profile.location,
                start_date=booking.camp.start_date,
                end_date=booking.camp.end_date,
                price=float(booking.camp.price),
            )
        return cls(
            id=booking.id,
            camp_id=booking.camp_id,
            participant_name=booking.participant_name,
            participant_age=booking.participant_age,
            participant_email=booking.participant_email,
            participant_phone=booking.participant_phone,
            message=booking.message,
            created=booking.created,
            camp=camp,
        )


class BookingCreatedResponse(BaseModel):
    booking: BookingResponse
    mailto: str = Field(..., description="Prefilled e-mail to the camp; the client opens it")
