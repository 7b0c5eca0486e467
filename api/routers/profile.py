"""
Profile Router - the caller's own profile.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from hoopcamps.auth_middleware import get_session
from hoopcamps.data.repositories import ProfileRepository
from hoopcamps.errors import NotFoundError, ValidationFailed
from hoopcamps.session import UserSession

from ..dependencies import get_profile_repository
from ..schemas.profile import ProfileUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["profile"])


@router.patch("/profile")
async def update_profile(
    body: ProfileUpdateRequest,
    session: UserSession = Depends(get_session),
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> dict[str, Any]:
    """Update full_name, phone and country. user_type is not editable here."""
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationFailed("Nothing to update")
    if session.profile is None:
        raise NotFoundError("Profile not found")

    profile = await profiles.update(session.user_id, changes)
    updated = UserSession(user_id=session.user_id, email=session.email, profile=profile)
    return updated.to_dict()
