"""
Pydantic schemas for the notification functions.

Payloads use camelCase keys on the wire.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApprovalEmailRequest(CamelModel):
    camp_name: str
    camp_email: str
    owner_name: str


class RejectionEmailRequest(CamelModel):
    camp_name: str
    camp_email: str
    owner_name: str
    rejection_reason: str


class ReviewVerificationRequest(CamelModel):
    review_id: str | None = None


class SubmissionDate(CamelModel):
    start_date: str
    end_date: str
    price: str
    days: int


class SubmissionNotificationRequest(CamelModel):
    camp_name: str
    owner_name: str = ""
    owner_email: str = ""
    owner_phone: str = ""
    camp_email: str = ""
    location: str = ""
    country: str = ""
    description: str = ""
    age_min: int = 0
    age_max: int = 0
    gender: str = ""
    capacity: int = 0
    camp_dates: list[SubmissionDate] = []
    image_urls: list[str] = []
    profile_image_url: str | None = None

    def template_context(self) -> dict[str, Any]:
        return self.model_dump(by_alias=False)


class EmailSentResponse(CamelModel):
    success: bool = True
    email_id: str
