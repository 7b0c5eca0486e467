"""
Submissions Router - camp owners submit camps for moderation.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from hoopcamps.auth_middleware import require_camp_owner
from hoopcamps.data.repositories import CountryRepository, SubmissionRepository
from hoopcamps.session import UserSession
from hoopcamps.storage import ImageStorage
from hoopcamps.validation import SubmissionLimits

from ..dependencies import (
    get_country_repository,
    get_image_storage,
    get_notifier,
    get_submission_limits,
    get_submission_repository,
)
from ..schemas.submissions import SubmissionCreatedResponse, SubmissionRequest, SubmissionResponse
from ..services.notifier import Notifier
from ..services.submission_intake import SubmissionIntakeService
from ..utils.uploads import read_image_uploads

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/submissions", tags=["submissions"])


def get_intake_service(
    submissions: SubmissionRepository = Depends(get_submission_repository),
    storage: ImageStorage = Depends(get_image_storage),
    notifier: Notifier = Depends(get_notifier),
    limits: SubmissionLimits = Depends(get_submission_limits),
    countries: CountryRepository = Depends(get_country_repository),
) -> SubmissionIntakeService:
    return SubmissionIntakeService(submissions, storage, notifier, limits, countries)


def parse_submission_data(data: str) -> SubmissionRequest:
    try:
        return SubmissionRequest.model_validate_json(data)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=json.loads(e.json())) from e


@router.post("", response_model=SubmissionCreatedResponse, status_code=201)
async def submit_camp(
    data: str = Form(..., description="SubmissionRequest as JSON"),
    images: list[UploadFile] | None = File(default=None, description="Camp images (1-50)"),
    session: UserSession = Depends(require_camp_owner),
    service: SubmissionIntakeService = Depends(get_intake_service),
) -> SubmissionCreatedResponse:
    """Submit a camp with its date ranges and images. Nothing is written unless every rule passes."""
    request = parse_submission_data(data)
    uploads = await read_image_uploads(images)

    result = await service.submit(
        session,
        request.to_profile(),
        [d.to_raw() for d in request.date_ranges],
        uploads,
        request.profile_image_index,
        request.owner_contact(),
    )
    return SubmissionCreatedResponse(
        submission_id=result.submission_id,
        status=result.status.value,
        date_count=result.date_count,
        image_count=result.image_count,
    )


@router.get("/mine", response_model=list[SubmissionResponse])
async def my_submissions(
    session: UserSession = Depends(require_camp_owner),
    service: SubmissionIntakeService = Depends(get_intake_service),
) -> list[SubmissionResponse]:
    """The caller's submissions, newest first, with status and rejection reason."""
    return [SubmissionResponse.from_model(s) for s in await service.list_mine(session)]
