"""Validation rules for camp submissions and camp edits.

All checks run before anything is written. The first failing rule raises
SubmissionValidationError with the message shown to the camp owner.

Usage:
    limits = SubmissionLimits.from_settings(get_settings())
    draft = validate_submission(profile, raw_dates, images, profile_index, contact, is_first, limits)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import SubmissionValidationError
from .models import CampProfile, DateRangeInput, ImageUpload, OwnerContact


@dataclass(frozen=True)
class SubmissionLimits:
    max_description_length: int = 10000
    max_images: int = 50
    max_image_bytes: int = 10 * 1024 * 1024
    min_commission_rate: Decimal = Decimal("0.05")

    @classmethod
    def from_settings(cls, settings: Any) -> SubmissionLimits:
        return cls(
            max_description_length=settings.max_description_length,
            max_images=settings.max_images_per_submission,
            max_image_bytes=settings.max_image_bytes,
            min_commission_rate=Decimal(str(settings.min_commission_rate)),
        )


@dataclass(frozen=True)
class RawDateRange:
    """Date range exactly as typed into the form (strings, possibly blank)"""

    start_date: str
    end_date: str
    price: str
    commission: str | None = None


@dataclass
class ValidatedSubmission:
    profile: CampProfile
    date_ranges: list[DateRangeInput]
    images: list[ImageUpload]
    profile_image_index: int
    owner_contact: OwnerContact | None


def parse_money(value: str | None, field_name: str) -> Decimal:
    """Parse a non-negative decimal amount such as "120" or "120.50"."""
    if value is None or not str(value).strip():
        raise SubmissionValidationError(f"Please enter a {field_name}")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise SubmissionValidationError(f"Invalid {field_name}: {value}") from e
    if not amount.is_finite() or amount < 0:
        raise SubmissionValidationError(f"Invalid {field_name}: {value}")
    return amount


def parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError as e:
        raise SubmissionValidationError(f"Invalid date: {value}") from e


def minimum_commission(price: Decimal, limits: SubmissionLimits) -> Decimal:
    return price * limits.min_commission_rate


def validate_date_range(raw: RawDateRange, limits: SubmissionLimits, require_commission: bool = True) -> DateRangeInput:
    """Validate one date range.

    Rules:
    - start, end and price are required
    - end date must be strictly after start date
    - commission must be at least min_commission_rate * price (exact decimal math,
      so a commission of exactly 5% passes and one cent less fails)
    """
    if not raw.start_date or not raw.end_date or not str(raw.price or "").strip():
        raise SubmissionValidationError("Please fill in all date ranges and prices")

    start = parse_date(raw.start_date)
    end = parse_date(raw.end_date)
    if end <= start:
        raise SubmissionValidationError("End date must be after start date for all date ranges")

    price = parse_money(raw.price, "price")

    commission = Decimal("0")
    if raw.commission is not None and str(raw.commission).strip():
        commission = parse_money(raw.commission, "commission")

    if require_commission and commission < minimum_commission(price, limits):
        raise SubmissionValidationError("Commission amount is below the minimum required threshold")

    return DateRangeInput(start_date=start, end_date=end, price=price, commission=commission)


def validate_date_ranges(
    raw_ranges: Sequence[RawDateRange], limits: SubmissionLimits, require_commission: bool = True
) -> list[DateRangeInput]:
    if not raw_ranges:
        raise SubmissionValidationError("Please add at least one date range")
    return [validate_date_range(raw, limits, require_commission) for raw in raw_ranges]


def validate_description(description: str, limits: SubmissionLimits) -> None:
    if len(description) > limits.max_description_length:
        raise SubmissionValidationError(
            f"Description must be {limits.max_description_length} characters or less"
        )


def validate_image_count(count: int, limits: SubmissionLimits, existing: int = 0) -> None:
    """Reject zero images and anything beyond the per-camp maximum."""
    if count + existing == 0:
        raise SubmissionValidationError("Please upload at least one image")
    if count + existing > limits.max_images:
        raise SubmissionValidationError(f"Maximum {limits.max_images} images allowed")


def validate_image(upload: ImageUpload, limits: SubmissionLimits) -> None:
    if not upload.content_type or not upload.content_type.startswith("image/"):
        raise SubmissionValidationError("Only image files are allowed")
    if len(upload.data) > limits.max_image_bytes:
        mb = limits.max_image_bytes // (1024 * 1024)
        raise SubmissionValidationError(f"Each image must be less than {mb}MB")


def validate_profile_image_index(index: int, image_count: int) -> None:
    if index < 0 or index >= image_count:
        raise SubmissionValidationError("Profile photo must be one of the uploaded images")


def validate_camp_profile(profile: CampProfile, limits: SubmissionLimits) -> None:
    if not profile.camp_name.strip():
        raise SubmissionValidationError("Please enter a camp name")
    if not profile.camp_email.strip() or "@" not in profile.camp_email:
        raise SubmissionValidationError("Please enter a valid camp email")
    if not profile.country_id:
        raise SubmissionValidationError("Please select a country")
    if profile.age_group_min < 0 or profile.age_group_max < profile.age_group_min:
        raise SubmissionValidationError("Maximum age must be greater than or equal to minimum age")
    if profile.capacity < 1:
        raise SubmissionValidationError("Capacity must be at least 1")
    validate_description(profile.description, limits)


def validate_owner_contact(contact: OwnerContact | None, is_first_submission: bool) -> OwnerContact | None:
    """Owner contact fields are mandatory on a user's first submission only."""
    if not is_first_submission:
        return contact
    if contact is None or not all(
        value.strip() for value in (contact.owner_name, contact.owner_email, contact.owner_phone)
    ):
        raise SubmissionValidationError("Please provide your name, email and phone for your first camp")
    return contact


def validate_submission(
    profile: CampProfile,
    raw_ranges: Sequence[RawDateRange],
    images: Sequence[ImageUpload],
    profile_image_index: int,
    owner_contact: OwnerContact | None,
    is_first_submission: bool,
    limits: SubmissionLimits,
) -> ValidatedSubmission:
    """Run every intake rule in form order and return the normalized submission."""
    date_ranges = validate_date_ranges(raw_ranges, limits)
    validate_description(profile.description, limits)
    validate_image_count(len(images), limits)
    for upload in images:
        validate_image(upload, limits)
    validate_profile_image_index(profile_image_index, len(images))
    validate_camp_profile(profile, limits)
    contact = validate_owner_contact(owner_contact, is_first_submission)

    return ValidatedSubmission(
        profile=profile,
        date_ranges=date_ranges,
        images=list(images),
        profile_image_index=profile_image_index,
        owner_contact=contact,
    )


def profile_first_order(image_count: int, profile_index: int) -> list[int]:
    """Indexes of the uploaded images in storage order: cover first, rest unchanged."""
    order = [i for i in range(image_count) if i != profile_index]
    return [profile_index, *order]
