"""Admin moderation - approving and rejecting camp submissions.

Approval fans a submission out into one camp per date range and copies the
submission's image rows onto every camp. Each camp carries the id of its
source date range, so re-running an approval after a failure reuses the
camps that already exist instead of duplicating them. The submission is
marked approved only after every camp exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING

from hoopcamps.compensation import CompensatingWrites
from hoopcamps.errors import InvalidTransitionError, ValidationFailed
from hoopcamps.models import CampSubmission, SubmissionDateRange, SubmissionStatus
from hoopcamps.session import UserSession

if TYPE_CHECKING:
    from hoopcamps.data.repositories import CampRepository, SubmissionRepository

    from .notifier import Notifier

logger = logging.getLogger(__name__)

DEFAULT_OWNER_NAME = "Camp Owner"


@dataclass
class ApprovalResult:
    submission_id: str
    camp_ids: list[str] = field(default_factory=list)
    reused_camp_ids: list[str] = field(default_factory=list)
    images_copied: int = 0
    notified: bool = False


def _require_pending(submission: CampSubmission, target: SubmissionStatus) -> None:
    if submission.status is not SubmissionStatus.PENDING:
        raise InvalidTransitionError(submission.id, submission.status.value, target.value)


class ModerationService:
    def __init__(self, submissions: SubmissionRepository, camps: CampRepository, notifier: Notifier) -> None:
        self.submissions = submissions
        self.camps = camps
        self.notifier = notifier

    async def list_pending(self) -> list[CampSubmission]:
        return await self.submissions.list_pending()

    async def get_detail(self, submission_id: str) -> CampSubmission:
        return await self.submissions.get(submission_id, with_children=True)

    async def approve(self, submission_id: str, session: UserSession) -> ApprovalResult:
        submission = await self.submissions.get(submission_id, with_children=True)
        _require_pending(submission, SubmissionStatus.APPROVED)

        if not submission.dates:
            raise ValidationFailed("Submission has no date ranges to publish")

        result = ApprovalResult(submission_id=submission_id)

        async with CompensatingWrites(f"approving submission {submission_id}") as tx:
            for date_range in submission.dates:
                existing = await self.camps.find_by_source_date(date_range.id)
                if existing is not None:
                    logger.info(f"Reusing camp {existing} for date range {date_range.id}")
                    result.reused_camp_ids.append(existing)
                    result.images_copied += await self._copy_missing_images(tx, submission, existing)
                    continue

                camp_id = await self._create_camp(tx, submission, date_range, session.user_id)
                result.camp_ids.append(camp_id)
                result.images_copied += await self._copy_missing_images(tx, submission, camp_id, fresh=True)

            tx.begin("marking submission approved")
            await self.submissions.set_status(submission_id, SubmissionStatus.APPROVED)

        logger.info(
            f"Submission {submission_id} approved by {session.user_id}: "
            f"{len(result.camp_ids)} camp(s) created, {len(result.reused_camp_ids)} reused"
        )

        result.notified = await self.notifier.camp_approved(
            camp_name=submission.profile.camp_name,
            camp_email=submission.profile.camp_email,
            owner_name=submission.owner_name or DEFAULT_OWNER_NAME,
        )
        return result

    async def reject(self, submission_id: str, reason: str | None, session: UserSession) -> CampSubmission:
        reason = (reason or "").strip()
        if not reason:
            raise ValidationFailed("Please provide a reason for rejection")

        submission = await self.submissions.get(submission_id)
        _require_pending(submission, SubmissionStatus.REJECTED)

        await self.submissions.set_status(submission_id, SubmissionStatus.REJECTED, rejection_reason=reason)
        logger.info(f"Submission {submission_id} rejected by {session.user_id}")

        submission.status = SubmissionStatus.REJECTED
        submission.rejection_reason = reason

        await self.notifier.camp_rejected(
            camp_name=submission.profile.camp_name,
            camp_email=submission.profile.camp_email,
            owner_name=submission.owner_name or DEFAULT_OWNER_NAME,
            reason=reason,
        )
        return submission

    async def _create_camp(
        self,
        tx: CompensatingWrites,
        submission: CampSubmission,
        date_range: SubmissionDateRange,
        approved_by: str,
    ) -> str:
        tx.begin(f"creating camp for {date_range.start_date} - {date_range.end_date}")
        camp_id = await self.camps.create_from_submission(submission, date_range, approved_by)
        tx.record(f"camp {camp_id}", partial(self.camps.delete, camp_id))
        return camp_id

    async def _copy_missing_images(
        self,
        tx: CompensatingWrites,
        submission: CampSubmission,
        camp_id: str,
        fresh: bool = False,
    ) -> int:
        """Copy submission image rows verbatim (url and order) onto the camp."""
        present: set[int] = set()
        if not fresh:
            present = {image.image_order for image in await self.camps.list_images(camp_id)}

        copied = 0
        for image in submission.images:
            if image.image_order in present:
                continue
            tx.begin(f"copying image {image.image_order} to camp {camp_id}")
            image_id = await self.camps.add_image(camp_id, image.image_url, image.image_order)
            tx.record(f"camp image {image_id}", partial(self.camps.delete_image, image_id))
            copied += 1
        return copied
