"""Camp repository for data access.

Handles published camps and their camp_images rows."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from pocketbase import PocketBase

from ...errors import NotFoundError
from ...models import (
    Camp,
    CampImage,
    CampProfile,
    CampStatus,
    CampSubmission,
    Country,
    Gender,
    SubmissionDateRange,
)
from ..pocketbase_helpers import (
    any_of,
    call_store,
    get_expanded,
    get_field,
    money,
    quote,
    to_date,
    to_datetime,
    to_decimal,
)
from .submission_repository import profile_from_db, profile_to_db

logger = logging.getLogger(__name__)

CAMPS = "camps"
CAMP_IMAGES = "camp_images"


def build_listing_filter(country_ids: list[str] | None = None, gender: Gender | None = None) -> str:
    """Server-side part of the camp listing filter.

    - always restricted to approved camps
    - country set membership when any countries are selected
    - gender: "both" matches only camps open to both; boys/girls also match "both"
    """
    parts = [f"status = {quote(CampStatus.APPROVED.value)}"]

    if country_ids:
        parts.append(any_of("country_id", country_ids))

    if gender is not None:
        if gender is Gender.BOTH:
            parts.append(f"gender = {quote(Gender.BOTH.value)}")
        else:
            parts.append(any_of("gender", [gender.value, Gender.BOTH.value]))

    return " && ".join(parts)


class CampRepository:
    """Repository for camps and camp images"""

    def __init__(self, pb_client: PocketBase) -> None:
        self.pb = pb_client

    # ----- fan-out writes -----

    async def create_from_submission(
        self,
        submission: CampSubmission,
        date_range: SubmissionDateRange,
        approved_by: str,
    ) -> str:
        """Materialize one approved camp for one submission date range."""
        data: dict[str, Any] = {
            **profile_to_db(submission.profile),
            "owner_id": submission.owner_id,
            "start_date": date_range.start_date.isoformat(),
            "end_date": date_range.end_date.isoformat(),
            "duration_days": date_range.duration_days,
            "price": money(date_range.price),
            "commission": money(date_range.commission),
            "status": CampStatus.APPROVED.value,
            "submission_id": submission.id,
            "source_date_id": date_range.id,
            "approved_by": approved_by,
            "approved_at": datetime.now(UTC).isoformat(),
        }
        record = await call_store(self.pb.collection(CAMPS).create, data)
        logger.info(f"Created camp {record.id} from submission {submission.id} date range {date_range.id}")
        return str(record.id)

    async def find_by_source_date(self, source_date_id: str) -> str | None:
        """Return the camp already materialized for a date range, if any."""
        result = await call_store(
            self.pb.collection(CAMPS).get_list,
            1,
            1,
            query_params={"filter": f"source_date_id = {quote(source_date_id)}"},
        )
        if result.items:
            return str(result.items[0].id)
        return None

    async def delete(self, camp_id: str) -> None:
        await call_store(self.pb.collection(CAMPS).delete, camp_id)

    # ----- images -----

    async def add_image(self, camp_id: str, image_url: str, image_order: int) -> str:
        record = await call_store(
            self.pb.collection(CAMP_IMAGES).create,
            {"camp_id": camp_id, "image_url": image_url, "image_order": image_order},
        )
        return str(record.id)

    async def list_images(self, camp_id: str) -> list[CampImage]:
        records = await call_store(
            self.pb.collection(CAMP_IMAGES).get_full_list,
            query_params={"filter": f"camp_id = {quote(camp_id)}", "sort": "image_order"},
        )
        return [_image_from_db(r) for r in records]

    async def images_for_camps(self, camp_ids: list[str]) -> dict[str, list[CampImage]]:
        if not camp_ids:
            return {}
        records = await call_store(
            self.pb.collection(CAMP_IMAGES).get_full_list,
            query_params={"filter": any_of("camp_id", camp_ids), "sort": "image_order"},
        )
        grouped: dict[str, list[CampImage]] = {camp_id: [] for camp_id in camp_ids}
        for r in records:
            image = _image_from_db(r)
            grouped.setdefault(image.camp_id, []).append(image)
        return grouped

    async def delete_image(self, image_id: str) -> None:
        await call_store(self.pb.collection(CAMP_IMAGES).delete, image_id)

    async def set_image_order(self, image_id: str, image_order: int) -> None:
        await call_store(self.pb.collection(CAMP_IMAGES).update, image_id, {"image_order": image_order})

    # ----- reads -----

    async def list_approved(self, country_ids: list[str] | None = None, gender: Gender | None = None) -> list[Camp]:
        """Approved camps matching the server-side filters, by start date."""
        records = await call_store(
            self.pb.collection(CAMPS).get_full_list,
            query_params={
                "filter": build_listing_filter(country_ids, gender),
                "sort": "start_date",
                "expand": "country_id",
            },
        )
        return [self._map_from_db(r) for r in records]

    async def get(self, camp_id: str, approved_only: bool = False) -> Camp:
        filter_str = f"id = {quote(camp_id)}"
        if approved_only:
            filter_str += f" && status = {quote(CampStatus.APPROVED.value)}"
        result = await call_store(
            self.pb.collection(CAMPS).get_list,
            1,
            1,
            query_params={"filter": filter_str, "expand": "country_id"},
        )
        if not result.items:
            raise NotFoundError("Camp not found")
        return self._map_from_db(result.items[0])

    async def list_for_owner(self, owner_id: str) -> list[Camp]:
        records = await call_store(
            self.pb.collection(CAMPS).get_full_list,
            query_params={"filter": f"owner_id = {quote(owner_id)}", "sort": "-created", "expand": "country_id"},
        )
        return [self._map_from_db(r) for r in records]

    # ----- edits -----

    async def update_details(
        self,
        camp_id: str,
        owner_id: str,
        profile: CampProfile,
        start_date: str,
        end_date: str,
        duration_days: int,
        price: float | None,
    ) -> None:
        data: dict[str, Any] = {
            **profile_to_db(profile),
            "start_date": start_date,
            "end_date": end_date,
            "duration_days": duration_days,
            "price": price,
        }
        await call_store(self.pb.collection(CAMPS).update, camp_id, data)
        logger.info(f"Owner {owner_id} updated camp {camp_id}")

    def _map_from_db(self, record: Any) -> Camp:
        country_record = get_expanded(record, "country_id")
        country = None
        if country_record is not None:
            country = Country(
                id=str(get_field(country_record, "id", "")),
                name=get_field(country_record, "name", ""),
                country_code=get_field(country_record, "country_code", ""),
            )

        commission = get_field(record, "commission")
        return Camp(
            id=str(record.id),
            owner_id=get_field(record, "owner_id", ""),
            profile=profile_from_db(record),
            start_date=to_date(get_field(record, "start_date")),  # type: ignore[arg-type]
            end_date=to_date(get_field(record, "end_date")),  # type: ignore[arg-type]
            duration_days=int(get_field(record, "duration_days", 0)),
            price=to_decimal(get_field(record, "price")),
            status=CampStatus(get_field(record, "status", CampStatus.APPROVED.value)),
            commission=to_decimal(commission) if commission is not None else None,
            submission_id=get_field(record, "submission_id") or None,
            source_date_id=get_field(record, "source_date_id") or None,
            approved_by=get_field(record, "approved_by") or None,
            approved_at=to_datetime(get_field(record, "approved_at")),
            country=country,
            created=to_datetime(get_field(record, "created")),
        )


def _image_from_db(record: Any) -> CampImage:
    return CampImage(
        id=str(record.id),
        camp_id=get_field(record, "camp_id", ""),
        image_url=get_field(record, "image_url", ""),
        image_order=int(get_field(record, "image_order", 0)),
    )
