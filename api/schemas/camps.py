"""
Pydantic schemas for camp listing, details and owner edits.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from hoopcamps.models import Camp, CampImage, CampProfile, Country, Gender

from .reviews import ReviewResponse


class CountryResponse(BaseModel):
    id: str
    name: str
    country_code: str = ""

    @classmethod
    def from_model(cls, country: Country) -> CountryResponse:
        return cls(id=country.id, name=country.name, country_code=country.country_code)


class CampImageResponse(BaseModel):
    id: str
    image_url: str
    image_order: int

    @classmethod
    def from_model(cls, image: CampImage) -> CampImageResponse:
        return cls(id=image.id, image_url=image.image_url, image_order=image.image_order)


class CampProfileFields(BaseModel):
    """Profile fields shared by submissions and camp edits."""

    camp_name: str = Field(..., description="Display name of the camp")
    camp_email: str = Field(..., description="Where booking requests are e-mailed")
    country_id: str
    location: str = ""
    description: str = ""
    age_group_min: int = Field(..., ge=0)
    age_group_max: int = Field(..., ge=0)
    gender: Gender
    capacity: int

    def to_profile(self) -> CampProfile:
        return CampProfile(
            camp_name=self.camp_name.strip(),
            camp_email=self.camp_email.strip(),
            country_id=self.country_id,
            location=self.location.strip(),
            description=self.description,
            age_group_min=self.age_group_min,
            age_group_max=self.age_group_max,
            gender=self.gender,
            capacity=self.capacity,
        )


class CampUpdateRequest(CampProfileFields):
    """Request body for PUT /api/owner/camps/{id}."""

    start_date: str
    end_date: str
    price: str


class CampResponse(BaseModel):
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
    start_date: date
    end_date: date
    duration_days: int
    price: float
    commission: float | None = None
    status: str
    submission_id: str | None = None
    approved_at: datetime | None = None
    cover_image_url: str | None = None
    images: list[CampImageResponse] = []

    @classmethod
    def from_model(cls, camp: Camp) -> CampResponse:
        p = camp.profile
        return cls(
            id=camp.id,
            owner_id=camp.owner_id,
            camp_name=p.camp_name,
            camp_email=p.camp_email,
            country_id=p.country_id,
            country_name=camp.country.name if camp.country else None,
            location=p.location,
            description=p.description,
            age_group_min=p.age_group_min,
            age_group_max=p.age_group_max,
            gender=p.gender,
            capacity=p.capacity,
            start_date=camp.start_date,
            end_date=camp.end_date,
            duration_days=camp.duration_days,
            price=float(camp.price),
            commission=float(camp.commission) if camp.commission is not None else None,
            status=camp.status.value,
            submission_id=camp.submission_id,
            approved_at=camp.approved_at,
            cover_image_url=camp.cover_image_url,
            images=[CampImageResponse.from_model(img) for img in camp.images],
        )


class CampListResponse(BaseModel):
    camps: list[CampResponse]
    total: int
    grouped: dict[str, list[CampResponse]] | None = Field(
        default=None,
        description="Camps keyed by country name (only when grouped=true)",
    )


class CampDetailsResponse(BaseModel):
    camp: CampResponse
    reviews: list[ReviewResponse]
    review_count: int
    average_rating: float | None = None
