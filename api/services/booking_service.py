"""Booking requests.

A booking is a stored request plus a prefilled e-mail to the camp. There is
no confirmation state: the camp confirms by replying to that e-mail.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote

from hoopcamps.errors import NotFoundError, ValidationFailed
from hoopcamps.models import BookingRequest, Camp
from hoopcamps.session import UserSession

if TYPE_CHECKING:
    from hoopcamps.data.repositories import BookingRepository, CampRepository

logger = logging.getLogger(__name__)


@dataclass
class BookingForm:
    participant_name: str
    participant_age: int | str
    participant_email: str
    participant_phone: str
    message: str = ""


def parse_age(value: int | str) -> int:
    try:
        age = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationFailed("Please enter a valid age") from None
    if age <= 0:
        raise ValidationFailed("Please enter a valid age")
    return age


def booking_subject(camp: Camp) -> str:
    return f"Basketball Camp Booking Request - {camp.profile.camp_name}"


def booking_body(camp: Camp, booking: BookingRequest, sender_name: str) -> str:
    country = camp.country.name if camp.country else "Unknown"
    return (
        "Hello,\n\n"
        f"I would like to book a spot at your camp: {camp.profile.camp_name}\n\n"
        "Camp Details:\n"
        f"- Location: {camp.profile.location}, {country}\n"
        f"- Dates: {camp.start_date.isoformat()} - {camp.end_date.isoformat()}\n"
        f"- Price: €{camp.price:.2f}\n\n"
        "Participant Information:\n"
        f"- Name: {booking.participant_name}\n"
        f"- Age: {booking.participant_age}\n"
        f"- Email: {booking.participant_email}\n"
        f"- Phone: {booking.participant_phone}\n\n"
        "Message:\n"
        f"{booking.message}\n\n"
        "Please confirm the booking and payment details.\n\n"
        "Best regards,\n"
        f"{sender_name}"
    )


def build_mailto(camp: Camp, booking: BookingRequest, sender_name: str, cc: str | None = None) -> str:
    """mailto: URI addressed to the camp e-mail, with subject and body percent-encoded."""
    params = []
    if cc:
        params.append(f"cc={quote(cc, safe='@')}")
    params.append(f"subject={quote(booking_subject(camp))}")
    params.append(f"body={quote(booking_body(camp, booking, sender_name))}")
    return f"mailto:{quote(camp.profile.camp_email, safe='@')}?" + "&".join(params)


class BookingService:
    def __init__(self, camps: CampRepository, bookings: BookingRepository, admin_email: str | None = None) -> None:
        self.camps = camps
        self.bookings = bookings
        self.admin_email = admin_email

    async def request_booking(self, session: UserSession, camp_id: str, form: BookingForm) -> tuple[BookingRequest, str]:
        """Store the request and return it with the mailto link to open."""
        age = parse_age(form.participant_age)
        if not form.participant_name.strip():
            raise ValidationFailed("Please enter the participant's name")
        if "@" not in form.participant_email:
            raise ValidationFailed("Please enter a valid email")

        camp = await self.camps.get(camp_id, approved_only=True)

        booking = await self.bookings.create(
            camp_id=camp.id,
            user_id=session.user_id,
            participant_name=form.participant_name.strip(),
            participant_age=age,
            participant_email=form.participant_email.strip(),
            participant_phone=form.participant_phone.strip(),
            message=form.message,
        )
        booking.camp = camp
        return booking, build_mailto(camp, booking, session.full_name, cc=self.admin_email)

    async def list_mine(self, session: UserSession) -> list[BookingRequest]:
        bookings = await self.bookings.list_for_user(session.user_id)
        camps: dict[str, Camp | None] = {}
        for booking in bookings:
            if booking.camp_id not in camps:
                try:
                    camps[booking.camp_id] = await self.camps.get(booking.camp_id)
                except NotFoundError:
                    logger.debug(f"Booking {booking.id} points at missing camp {booking.camp_id}")
                    camps[booking.camp_id] = None
            booking.camp = camps[booking.camp_id]
        return bookings
