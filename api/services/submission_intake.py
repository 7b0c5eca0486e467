"""Submission intake - validates and stores a new camp submission.

Every rule runs before the first write. The writes themselves (submission
row, date rows, image uploads, image rows) happen inside CompensatingWrites,
so a failure part way leaves nothing behind.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any

from hoopcamps.compensation import CompensatingWrites
from hoopcamps.errors import HoopCampsError
from hoopcamps.models import CampProfile, CampSubmission, ImageUpload, OwnerContact, SubmissionStatus
from hoopcamps.session import UserSession
from hoopcamps.validation import (
    RawDateRange,
    SubmissionLimits,
    ValidatedSubmission,
    profile_first_order,
    validate_submission,
)

if TYPE_CHECKING:
    from hoopcamps.data.repositories import CountryRepository, SubmissionRepository
    from hoopcamps.storage import ImageStorage

    from .notifier import Notifier

logger = logging.getLogger(__name__)


@dataclass
class IntakeResult:
    submission_id: str
    status: SubmissionStatus
    date_count: int
    image_count: int
    image_urls: list[str]


class SubmissionIntakeService:
    def __init__(
        self,
        submissions: SubmissionRepository,
        storage: ImageStorage,
        notifier: Notifier,
        limits: SubmissionLimits,
        countries: CountryRepository | None = None,
    ) -> None:
        self.submissions = submissions
        self.storage = storage
        self.notifier = notifier
        self.limits = limits
        self.countries = countries

    async def submit(
        self,
        session: UserSession,
        profile: CampProfile,
        raw_ranges: Sequence[RawDateRange],
        images: Sequence[ImageUpload],
        profile_image_index: int,
        owner_contact: OwnerContact | None = None,
    ) -> IntakeResult:
        """Validate everything, then write the submission and its children."""
        is_first = not await self.submissions.owner_has_submissions(session.user_id)
        draft = validate_submission(
            profile,
            raw_ranges,
            images,
            profile_image_index,
            owner_contact,
            is_first,
            self.limits,
        )

        async with CompensatingWrites(f"submitting camp '{profile.camp_name}'") as tx:
            tx.begin("creating submission")
            submission_id = await self.submissions.create(session.user_id, draft.profile, draft.owner_contact)
            tx.record(f"submission {submission_id}", partial(self.submissions.delete, submission_id))

            for date_range in draft.date_ranges:
                tx.begin(f"saving date range {date_range.start_date} - {date_range.end_date}")
                date_id = await self.submissions.add_date_range(submission_id, date_range)
                tx.record(f"date range {date_id}", partial(self.submissions.delete_date_range, date_id))

            # Serial uploads; the profile photo goes first so it lands at order 0
            image_urls: list[str] = []
            for order, index in enumerate(profile_first_order(len(draft.images), draft.profile_image_index)):
                tx.begin(f"uploading image {index + 1} of {len(draft.images)}")
                stored = await self.storage.upload(submission_id, order, draft.images[index])
                tx.record(f"object {stored.key}", partial(self.storage.delete, stored))
                image_urls.append(stored.public_url)

            for order, url in enumerate(image_urls):
                tx.begin(f"saving image {order}")
                image_id = await self.submissions.add_image(submission_id, url, order)
                tx.record(f"image row {image_id}", partial(self.submissions.delete_image, image_id))

        logger.info(
            f"Submission {submission_id} created by {session.user_id}: "
            f"{len(draft.date_ranges)} date range(s), {len(image_urls)} image(s)"
        )

        await self._notify_admin(session, draft, image_urls)

        return IntakeResult(
            submission_id=submission_id,
            status=SubmissionStatus.PENDING,
            date_count=len(draft.date_ranges),
            image_count=len(image_urls),
            image_urls=image_urls,
        )

    async def list_mine(self, session: UserSession) -> list[CampSubmission]:
        return await self.submissions.list_for_owner(session.user_id)

    async def _country_name(self, country_id: str) -> str:
        if self.countries is None:
            return ""
        for country in await self.countries.list_all():
            if country.id == country_id:
                return country.name
        return ""

    async def _notify_admin(self, session: UserSession, draft: ValidatedSubmission, image_urls: list[str]) -> None:
        try:
            country = await self._country_name(draft.profile.country_id)
        except HoopCampsError as e:
            logger.warning(f"Could not resolve country for submission notice: {e}")
            country = ""

        summary = build_submission_summary(session, draft, image_urls, country)
        if not await self.notifier.submission_received(summary):
            logger.warning(f"Admin was not notified about new camp '{draft.profile.camp_name}'")


def build_submission_summary(
    session: UserSession,
    draft: ValidatedSubmission,
    image_urls: list[str],
    country: str = "",
) -> dict[str, Any]:
    """Payload for the send-camp-submission-notification function."""
    contact = draft.owner_contact
    profile = draft.profile
    return {
        "campName": profile.camp_name,
        "ownerName": contact.owner_name if contact else session.full_name,
        "ownerEmail": contact.owner_email if contact else session.email,
        "ownerPhone": contact.owner_phone if contact else (session.profile.phone if session.profile else "") or "",
        "campEmail": profile.camp_email,
        "location": profile.location,
        "country": country,
        "description": profile.description,
        "ageMin": profile.age_group_min,
        "ageMax": profile.age_group_max,
        "gender": profile.gender.value,
        "capacity": profile.capacity,
        "campDates": [
            {
                "startDate": d.start_date.isoformat(),
                "endDate": d.end_date.isoformat(),
                "price": str(d.price),
                "days": d.duration_days,
            }
            for d in draft.date_ranges
        ],
        "imageUrls": image_urls,
        "profileImageUrl": image_urls[0] if image_urls else None,
    }
