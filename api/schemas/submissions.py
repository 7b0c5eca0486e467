"""
Pydantic schemas for camp submissions and moderation.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from hoopcamps.models import CampSubmission, Gender, OwnerContact
from hoopcamps.validation import RawDateRange

from .camps import CampProfileFields


class DateRangeRequest(BaseModel):
    """One date range as typed into the form (decimal strings)."""

    start_date: str = ""
    end_date: str = ""
    price: str = ""
    commission: str | None = None

    def to_raw(self) -> RawDateRange:
        return RawDateRange(
            start_date=self.start_date,
            end_date=self.end_date,
            price=self.price,
            commission=self.commission,
        )


class SubmissionRequest(CampProfileFields):
    """JSON `data` part of the multipart submission form."""

    date_ranges: list[DateRangeRequest] = []
    profile_image_index: int = Field(default=0, description="Index of the cover photo among the uploaded files")
    owner_name: str | None = None
    owner_email: str | None = None
    owner_phone: str | None = None

    def owner_contact(self) -> OwnerContact | None:
        if not any((self.owner_name, self.owner_email, self.owner_phone)):
            return None
        return OwnerContact(
            owner_name=(self.owner_name or "").strip(),
            owner_email=(self.owner_email or "").strip(),
            owner_phone=(self.owner_phone or "").strip(),
        )


class SubmissionCreatedResponse(BaseModel):
    submission_id: str
    status: str
    date_count: int
    image_count: int


class SubmissionDateResponse(BaseModel):
    id: str
    start_date: date
    end_date: date
    duration_days: int
    price: float
    commission: float | None = None


class SubmissionImageResponse(BaseModel):
    id: str
    image_url: str
    image_order: int


class SubmissionResponse(BaseModel):
    id: str
    owner_id: str
    camp_name: str
    camp_email: str
    country_id: str
    country_name: str | None = None
    location: str
    description: str
    age_group_min: int
    age_group_max: int
    gender: Gender
    capacity: int
    status: str
    rejection_reason: str | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    owner_phone: str | None = None
    created: datetime | None = None
    dates: list[SubmissionDateResponse] = []
    images: list[SubmissionImageResponse] = []

    @classmethod
    def from_model(cls, submission: CampSubmission) -> SubmissionResponse:
        p = submission.profile
        return cls(
            id=submission.id,
            owner_id=submission.owner_id,
            camp_name=p.camp_name,
            camp_email=p.camp_email,
            country_id=p.country_id,
            country_name=submission.country_name,
            location=p.location,
            description=p.description,
            age_group_min=p.age_group_min,
            age_group_max=p.age_group_max,
            gender=p.gender,
            capacity=p.capacity,
            status=submission.status.value,
            rejection_reason=submission.rejection_reason,
            owner_name=submission.owner_name,
            owner_email=submission.owner_email,
            owner_phone=submission.owner_phone,
            created=submission.created,
            dates=[
                SubmissionDateResponse(
                    id=d.id,
                    start_date=d.start_date,
                    end_date=d.end_date,
                    duration_days=d.duration_days,
                    price=float(d.price),
                    commission=float(d.commission) if d.commission is not None else None,
                )
                for d in submission.dates
            ],
            images=[
                SubmissionImageResponse(id=i.id, image_url=i.image_url, image_order=i.image_order)
                for i in submission.images
            ],
        )


class RejectRequest(BaseModel):
    reason: str = Field(default="", description="Shown to the camp owner; must not be blank")


class ApprovalResponse(BaseModel):
    submission_id: str
    status: str
    camp_ids: list[str]
    reused_camp_ids: list[str]
    images_copied: int
    notified: bool
