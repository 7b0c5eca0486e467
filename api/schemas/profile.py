"""
Pydantic schemas for the caller's profile.
"""

from __future__ import annotations

from pydantic import BaseModel


class ProfileUpdateRequest(BaseModel):
    """Editable profile fields. user_type cannot be changed through the API."""

    full_name: str | None = None
    phone: str | None = None
    country: str | None = None
