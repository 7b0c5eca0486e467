"""Camp owner dashboard and camp editing."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING

from hoopcamps.compensation import CompensatingWrites
from hoopcamps.errors import AccessDeniedError, DashboardTimeoutError, NotFoundError, ValidationFailed
from hoopcamps.models import BookingRequest, Camp, CampImage, CampProfile, ImageUpload, Review
from hoopcamps.session import UserSession
from hoopcamps.validation import (
    RawDateRange,
    SubmissionLimits,
    validate_camp_profile,
    validate_date_range,
    validate_image,
    validate_image_count,
)

if TYPE_CHECKING:
    from hoopcamps.data.repositories import BookingRepository, CampRepository, ReviewRepository
    from hoopcamps.storage import ImageStorage

logger = logging.getLogger(__name__)


@dataclass
class OwnerOverview:
    camps: list[Camp] = field(default_factory=list)
    bookings: list[BookingRequest] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)


def cover_order(images: Sequence[CampImage], cover_id: str) -> dict[str, int]:
    """New image_order per image id: the cover at 0, the rest keep their relative order."""
    ordered = sorted(images, key=lambda img: img.image_order)
    if not any(img.id == cover_id for img in ordered):
        raise NotFoundError("Image not found")
    rest = [img for img in ordered if img.id != cover_id]
    return {cover_id: 0, **{img.id: i for i, img in enumerate(rest, start=1)}}


class OwnerService:
    def __init__(
        self,
        camps: CampRepository,
        bookings: BookingRepository,
        reviews: ReviewRepository,
        storage: ImageStorage,
        limits: SubmissionLimits,
        dashboard_timeout: float = 5.0,
    ) -> None:
        self.camps = camps
        self.bookings = bookings
        self.reviews = reviews
        self.storage = storage
        self.limits = limits
        self.dashboard_timeout = dashboard_timeout

    async def _load_camps(self, owner_id: str) -> list[Camp]:
        camps = await self.camps.list_for_owner(owner_id)
        images = await self.camps.images_for_camps([c.id for c in camps])
        for camp in camps:
            camp.images = images.get(camp.id, [])
        return camps

    async def list_camps(self, session: UserSession) -> list[Camp]:
        """Owned camps, newest first. Abandoned with DashboardTimeoutError after the watchdog delay."""
        try:
            return await asyncio.wait_for(self._load_camps(session.user_id), timeout=self.dashboard_timeout)
        except TimeoutError:
            logger.warning(f"Owner dashboard for {session.user_id} took longer than {self.dashboard_timeout}s")
            raise DashboardTimeoutError() from None

    async def overview(self, session: UserSession) -> OwnerOverview:
        camps = await self.list_camps(session)
        camp_ids = [c.id for c in camps]
        bookings = await self.bookings.list_for_camps(camp_ids)
        reviews = await self.reviews.list_for_camps(camp_ids)
        return OwnerOverview(camps=camps, bookings=bookings, reviews=reviews)

    async def _owned_camp(self, session: UserSession, camp_id: str) -> Camp:
        camp = await self.camps.get(camp_id)
        if camp.owner_id != session.user_id:
            logger.warning(f"User {session.user_id} tried to modify camp {camp_id} owned by {camp.owner_id}")
            raise AccessDeniedError("You can only edit your own camps")
        return camp

    async def update_camp(
        self,
        session: UserSession,
        camp_id: str,
        profile: CampProfile,
        date_range: RawDateRange,
    ) -> Camp:
        """Edit a camp's profile fields, dates and price. Commission is not re-checked."""
        parsed = validate_date_range(date_range, self.limits, require_commission=False)
        validate_camp_profile(profile, self.limits)

        await self._owned_camp(session, camp_id)
        await self.camps.update_details(
            camp_id,
            session.user_id,
            profile,
            parsed.start_date.isoformat(),
            parsed.end_date.isoformat(),
            parsed.duration_days,
            float(parsed.price),
        )
        return await self.camps.get(camp_id)

    async def add_images(self, session: UserSession, camp_id: str, images: Sequence[ImageUpload]) -> list[CampImage]:
        """Append images after the existing ones, uploading serially."""
        if not images:
            raise ValidationFailed("Please upload at least one image")

        await self._owned_camp(session, camp_id)
        existing = await self.camps.list_images(camp_id)
        validate_image_count(len(images), self.limits, existing=len(existing))
        for upload in images:
            validate_image(upload, self.limits)

        next_order = max((img.image_order for img in existing), default=-1) + 1
        added: list[CampImage] = []

        async with CompensatingWrites(f"adding images to camp {camp_id}") as tx:
            for offset, upload in enumerate(images):
                order = next_order + offset
                tx.begin(f"uploading image {offset + 1} of {len(images)}")
                stored = await self.storage.upload(camp_id, order, upload)
                tx.record(f"object {stored.key}", partial(self.storage.delete, stored))

                tx.begin(f"saving image {order}")
                image_id = await self.camps.add_image(camp_id, stored.public_url, order)
                tx.record(f"camp image {image_id}", partial(self.camps.delete_image, image_id))
                added.append(CampImage(id=image_id, camp_id=camp_id, image_url=stored.public_url, image_order=order))

        logger.info(f"Added {len(added)} image(s) to camp {camp_id}")
        return added

    async def delete_image(self, session: UserSession, camp_id: str, image_id: str) -> None:
        await self._owned_camp(session, camp_id)
        images = await self.camps.list_images(camp_id)
        if not any(img.id == image_id for img in images):
            raise NotFoundError("Image not found")
        if len(images) == 1:
            raise ValidationFailed("A camp needs at least one image")
        await self.camps.delete_image(image_id)
        logger.info(f"Deleted image {image_id} from camp {camp_id}")

    async def set_cover(self, session: UserSession, camp_id: str, image_id: str) -> list[CampImage]:
        await self._owned_camp(session, camp_id)
        images = await self.camps.list_images(camp_id)
        new_order = cover_order(images, image_id)

        for image in images:
            if image.image_order != new_order[image.id]:
                await self.camps.set_image_order(image.id, new_order[image.id])
                image.image_order = new_order[image.id]

        return sorted(images, key=lambda img: img.image_order)
