"""Submission repository for data access.

Handles camp_submissions and their camp_submission_dates and
camp_submission_images child rows."""

from __future__ import annotations

import logging
from typing import Any

from pocketbase import PocketBase

from ...errors import NotFoundError
from ...models import (
    CampProfile,
    CampSubmission,
    DateRangeInput,
    Gender,
    OwnerContact,
    SubmissionDateRange,
    SubmissionImage,
    SubmissionStatus,
)
from ..pocketbase_helpers import (
    call_store,
    get_expanded,
    get_field,
    money,
    quote,
    to_date,
    to_datetime,
    to_decimal,
)

logger = logging.getLogger(__name__)

SUBMISSIONS = "camp_submissions"
SUBMISSION_DATES = "camp_submission_dates"
SUBMISSION_IMAGES = "camp_submission_images"


class SubmissionRepository:
    """Repository for camp submissions and their child rows"""

    def __init__(self, pb_client: PocketBase) -> None:
        self.pb = pb_client

    # ----- writes -----

    async def create(
        self,
        owner_id: str,
        profile: CampProfile,
        owner_contact: OwnerContact | None = None,
    ) -> str:
        """Insert a pending submission and return its id."""
        data: dict[str, Any] = {
            **profile_to_db(profile),
            "owner_id": owner_id,
            "status": SubmissionStatus.PENDING.value,
        }
        if owner_contact is not None:
            data["owner_name"] = owner_contact.owner_name
            data["owner_email"] = owner_contact.owner_email
            data["owner_phone"] = owner_contact.owner_phone

        record = await call_store(self.pb.collection(SUBMISSIONS).create, data)
        logger.info(f"Created submission {record.id} for owner {owner_id}")
        return str(record.id)

    async def add_date_range(self, submission_id: str, date_range: DateRangeInput) -> str:
        record = await call_store(
            self.pb.collection(SUBMISSION_DATES).create,
            {
                "submission_id": submission_id,
                "start_date": date_range.start_date.isoformat(),
                "end_date": date_range.end_date.isoformat(),
                "duration_days": date_range.duration_days,
                "price": money(date_range.price),
                "commission": money(date_range.commission),
            },
        )
        return str(record.id)

    async def add_image(self, submission_id: str, image_url: str, image_order: int) -> str:
        record = await call_store(
            self.pb.collection(SUBMISSION_IMAGES).create,
            {"submission_id": submission_id, "image_url": image_url, "image_order": image_order},
        )
        return str(record.id)

    async def delete(self, submission_id: str) -> None:
        await call_store(self.pb.collection(SUBMISSIONS).delete, submission_id)

    async def delete_date_range(self, date_id: str) -> None:
        await call_store(self.pb.collection(SUBMISSION_DATES).delete, date_id)

    async def delete_image(self, image_id: str) -> None:
        await call_store(self.pb.collection(SUBMISSION_IMAGES).delete, image_id)

    async def set_status(
        self,
        submission_id: str,
        status: SubmissionStatus,
        rejection_reason: str | None = None,
    ) -> None:
        """Set status (and reason when rejecting) in a single update."""
        data: dict[str, Any] = {"status": status.value}
        if rejection_reason is not None:
            data["rejection_reason"] = rejection_reason
        await call_store(self.pb.collection(SUBMISSIONS).update, submission_id, data)
        logger.info(f"Submission {submission_id} is now {status.value}")

    # ----- reads -----

    async def get(self, submission_id: str, with_children: bool = False) -> CampSubmission:
        try:
            record = await call_store(
                self.pb.collection(SUBMISSIONS).get_one,
                submission_id,
                query_params={"expand": "country_id"},
            )
        except NotFoundError as e:
            raise NotFoundError("Submission not found") from e

        submission = self._map_from_db(record)
        if with_children:
            submission.dates = await self.list_dates(submission_id)
            submission.images = await self.list_images(submission_id)
        return submission

    async def list_dates(self, submission_id: str) -> list[SubmissionDateRange]:
        records = await call_store(
            self.pb.collection(SUBMISSION_DATES).get_full_list,
            query_params={"filter": f"submission_id = {quote(submission_id)}", "sort": "start_date"},
        )
        return [
            SubmissionDateRange(
                id=str(r.id),
                submission_id=submission_id,
                start_date=to_date(get_field(r, "start_date")),  # type: ignore[arg-type]
                end_date=to_date(get_field(r, "end_date")),  # type: ignore[arg-type]
                duration_days=int(get_field(r, "duration_days", 0)),
                price=to_decimal(get_field(r, "price")),
                commission=to_decimal(get_field(r, "commission")) if get_field(r, "commission") is not None else None,
            )
            for r in records
        ]

    async def list_images(self, submission_id: str) -> list[SubmissionImage]:
        records = await call_store(
            self.pb.collection(SUBMISSION_IMAGES).get_full_list,
            query_params={"filter": f"submission_id = {quote(submission_id)}", "sort": "image_order"},
        )
        return [
            SubmissionImage(
                id=str(r.id),
                submission_id=submission_id,
                image_url=get_field(r, "image_url", ""),
                image_order=int(get_field(r, "image_order", 0)),
            )
            for r in records
        ]

    async def list_pending(self) -> list[CampSubmission]:
        """Pending submissions, newest first, with their country expanded."""
        records = await call_store(
            self.pb.collection(SUBMISSIONS).get_full_list,
            query_params={
                "filter": f"status = {quote(SubmissionStatus.PENDING.value)}",
                "sort": "-created",
                "expand": "country_id",
            },
        )
        return [self._map_from_db(r) for r in records]

    async def list_for_owner(self, owner_id: str) -> list[CampSubmission]:
        records = await call_store(
            self.pb.collection(SUBMISSIONS).get_full_list,
            query_params={"filter": f"owner_id = {quote(owner_id)}", "sort": "-created", "expand": "country_id"},
        )
        return [self._map_from_db(r) for r in records]

    async def owner_has_submissions(self, owner_id: str) -> bool:
        result = await call_store(
            self.pb.collection(SUBMISSIONS).get_list,
            1,
            1,
            query_params={"filter": f"owner_id = {quote(owner_id)}"},
        )
        return bool(result.items)

    def _map_from_db(self, record: Any) -> CampSubmission:
        country = get_expanded(record, "country_id")
        return CampSubmission(
            id=str(record.id),
            owner_id=get_field(record, "owner_id", ""),
            profile=profile_from_db(record),
            status=SubmissionStatus(get_field(record, "status", SubmissionStatus.PENDING.value)),
            owner_name=get_field(record, "owner_name") or None,
            owner_email=get_field(record, "owner_email") or None,
            owner_phone=get_field(record, "owner_phone") or None,
            rejection_reason=get_field(record, "rejection_reason") or None,
            country_name=get_field(country, "name") if country is not None else None,
            created=to_datetime(get_field(record, "created")),
        )


def profile_to_db(profile: CampProfile) -> dict[str, Any]:
    """Fields shared by camp_submissions and camps rows."""
    return {
        "camp_name": profile.camp_name,
        "camp_email": profile.camp_email,
        "country_id": profile.country_id,
        "location": profile.location,
        "description": profile.description,
        "age_group_min": profile.age_group_min,
        "age_group_max": profile.age_group_max,
        "gender": profile.gender.value,
        "capacity": profile.capacity,
    }


def profile_from_db(record: Any) -> CampProfile:
    return CampProfile(
        camp_name=get_field(record, "camp_name", "") or get_field(record, "name", ""),
        camp_email=get_field(record, "camp_email", ""),
        country_id=get_field(record, "country_id", ""),
        location=get_field(record, "location", ""),
        description=get_field(record, "description", ""),
        age_group_min=int(get_field(record, "age_group_min", 0)),
        age_group_max=int(get_field(record, "age_group_max", 0)),
        gender=Gender(get_field(record, "gender", Gender.BOTH.value)),
        capacity=int(get_field(record, "capacity", 0)),
    )
