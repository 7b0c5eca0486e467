"""
Admin Router - moderation of camp submissions.

All endpoints require user_type = admin.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hoopcamps.auth_middleware import require_admin
from hoopcamps.data.repositories import CampRepository, SubmissionRepository
from hoopcamps.models import SubmissionStatus
from hoopcamps.session import UserSession

from ..dependencies import get_camp_repository, get_notifier, get_submission_repository
from ..schemas.submissions import ApprovalResponse, RejectRequest, SubmissionResponse
from ..services.moderation_service import ModerationService
from ..services.notifier import Notifier

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def get_moderation_service(
    submissions: SubmissionRepository = Depends(get_submission_repository),
    camps: CampRepository = Depends(get_camp_repository),
    notifier: Notifier = Depends(get_notifier),
) -> ModerationService:
    return ModerationService(submissions, camps, notifier)


@router.get("/submissions", response_model=list[SubmissionResponse])
async def list_pending_submissions(
    service: ModerationService = Depends(get_moderation_service),
) -> list[SubmissionResponse]:
    """Pending submissions, newest first."""
    return [SubmissionResponse.from_model(s) for s in await service.list_pending()]


@router.get("/submissions/{submission_id}", response_model=SubmissionResponse)
async def get_submission(
    submission_id: str,
    service: ModerationService = Depends(get_moderation_service),
) -> SubmissionResponse:
    return SubmissionResponse.from_model(await service.get_detail(submission_id))


@router.post("/submissions/{submission_id}/approve", response_model=ApprovalResponse)
async def approve_submission(
    submission_id: str,
    session: UserSession = Depends(require_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> ApprovalResponse:
    """Publish one camp per date range, then mark the submission approved."""
    result = await service.approve(submission_id, session)
    return ApprovalResponse(
        submission_id=result.submission_id,
        status=SubmissionStatus.APPROVED.value,
        camp_ids=result.camp_ids,
        reused_camp_ids=result.reused_camp_ids,
        images_copied=result.images_copied,
        notified=result.notified,
    )


@router.post("/submissions/{submission_id}/reject", response_model=SubmissionResponse)
async def reject_submission(
    submission_id: str,
    body: RejectRequest,
    session: UserSession = Depends(require_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> SubmissionResponse:
    return SubmissionResponse.from_model(await service.reject(submission_id, body.reason, session))
