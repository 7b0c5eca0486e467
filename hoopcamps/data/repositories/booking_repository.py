"""Booking request repository for data access."""

from __future__ import annotations

import logging
from typing import Any

from pocketbase import PocketBase

from ...models import BookingRequest
from ..pocketbase_helpers import any_of, call_store, get_field, quote, to_datetime

logger = logging.getLogger(__name__)

BOOKING_REQUESTS = "booking_requests"


class BookingRepository:
    """Repository for booking_requests (no status; confirmation is off-platform)"""

    def __init__(self, pb_client: PocketBase) -> None:
        self.pb = pb_client

    async def create(
        self,
        camp_id: str,
        user_id: str,
        participant_name: str,
        participant_age: int,
        participant_email: str,
        participant_phone: str,
        message: str,
    ) -> BookingRequest:
        record = await call_store(
            self.pb.collection(BOOKING_REQUESTS).create,
            {
                "camp_id": camp_id,
                "user_id": user_id,
                "participant_name": participant_name,
                "participant_age": participant_age,
                "participant_email": participant_email,
                "participant_phone": participant_phone,
                "message": message,
            },
        )
        logger.info(f"Created booking request {record.id} for camp {camp_id} by user {user_id}")
        return self._map_from_db(record)

    async def list_for_user(self, user_id: str) -> list[BookingRequest]:
        records = await call_store(
            self.pb.collection(BOOKING_REQUESTS).get_full_list,
            query_params={"filter": f"user_id = {quote(user_id)}", "sort": "-created"},
        )
        return [self._map_from_db(r) for r in records]

    async def list_for_camps(self, camp_ids: list[str]) -> list[BookingRequest]:
        if not camp_ids:
            return []
        records = await call_store(
            self.pb.collection(BOOKING_REQUESTS).get_full_list,
            query_params={"filter": any_of("camp_id", camp_ids), "sort": "-created"},
        )
        return [self._map_from_db(r) for r in records]

    def _map_from_db(self, record: Any) -> BookingRequest:
        return BookingRequest(
            id=str(record.id),
            camp_id=get_field(record, "camp_id", ""),
            user_id=get_field(record, "user_id", ""),
            participant_name=get_field(record, "participant_name", ""),
            participant_age=int(get_field(record, "participant_age", 0)),
            participant_email=get_field(record, "participant_email", ""),
            participant_phone=get_field(record, "participant_phone", ""),
            message=get_field(record, "message", ""),
            created=to_datetime(get_field(record, "created")),
        )
