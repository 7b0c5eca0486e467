"""Core domain models for the camp marketplace.

These models represent the business concepts of the submission lifecycle
and are independent of PocketBase. Repositories map records to and from
these types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class UserType(Enum):
    """Profile types stored on users_profile"""

    REGULAR = "regular"
    CAMP_OWNER = "camp_owner"
    ADMIN = "admin"


class Gender(Enum):
    """Who a camp is open to"""

    BOYS = "boys"
    GIRLS = "girls"
    BOTH = "both"


class SubmissionStatus(Enum):
    """Moderation state of a camp submission.

    pending -> approved and pending -> rejected are the only transitions;
    both targets are terminal.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CampStatus(Enum):
    """Status of a published camp row"""

    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewStatus(Enum):
    """Review lifecycle.

    Reviews start at PENDING_EMAIL_VERIFICATION; nothing in this service
    moves them to PUBLISHED yet.
    """

    PENDING_EMAIL_VERIFICATION = "pending_email_verification"
    PUBLISHED = "published"
    REJECTED = "rejected"


@dataclass
class UserProfile:
    """Profile row keyed by the authenticated identity"""

    id: str
    user_type: UserType
    full_name: str = ""
    phone: str | None = None
    country: str | None = None


@dataclass
class Country:
    id: str
    name: str
    country_code: str = ""


@dataclass
class DateRangeInput:
    """A validated start/end/price/commission tuple from the submission form"""

    start_date: date
    end_date: date
    price: Decimal
    commission: Decimal

    @property
    def duration_days(self) -> int:
        """Inclusive number of camp days."""
        return (self.end_date - self.start_date).days + 1


@dataclass
class ImageUpload:
    """An image file received from the client, not yet stored"""

    filename: str
    content_type: str
    data: bytes

    @property
    def extension(self) -> str:
        if "." in self.filename:
            return self.filename.rsplit(".", 1)[-1].lower()
        return self.content_type.split("/")[-1] if "/" in self.content_type else "bin"


@dataclass
class CampProfile:
    """Fields shared by a submission and every camp materialized from it"""

    camp_name: str
    camp_email: str
    country_id: str
    location: str
    description: str
    age_group_min: int
    age_group_max: int
    gender: Gender
    capacity: int


@dataclass
class OwnerContact:
    owner_name: str
    owner_email: str
    owner_phone: str


@dataclass
class SubmissionDateRange:
    id: str
    submission_id: str
    start_date: date
    end_date: date
    duration_days: int
    price: Decimal
    commission: Decimal | None = None


@dataclass
class SubmissionImage:
    id: str
    submission_id: str
    image_url: str
    image_order: int


@dataclass
class CampSubmission:
    """An owner-proposed camp awaiting moderation"""

    id: str
    owner_id: str
    profile: CampProfile
    status: SubmissionStatus = SubmissionStatus.PENDING
    owner_name: str | None = None
    owner_email: str | None = None
    owner_phone: str | None = None
    rejection_reason: str | None = None
    country_name: str | None = None
    created: datetime | None = None
    dates: list[SubmissionDateRange] = field(default_factory=list)
    images: list[SubmissionImage] = field(default_factory=list)


@dataclass
class CampImage:
    id: str
    camp_id: str
    image_url: str
    image_order: int


@dataclass
class Camp:
    """A published, bookable listing - one per approved date range"""

    id: str
    owner_id: str
    profile: CampProfile
    start_date: date
    end_date: date
    duration_days: int
    price: Decimal
    status: CampStatus = CampStatus.APPROVED
    commission: Decimal | None = None
    submission_id: str | None = None
    source_date_id: str | None = None
    approved_by: str | None = None
    approved_at: datetime | None = None
    country: Country | None = None
    images: list[CampImage] = field(default_factory=list)
    created: datetime | None = None

    @property
    def cover_image_url(self) -> str | None:
        if not self.images:
            return None
        return min(self.images, key=lambda img: img.image_order).image_url


@dataclass
class BookingRequest:
    """A booking request; confirmation happens off-platform by e-mail"""

    id: str
    camp_id: str
    user_id: str
    participant_name: str
    participant_age: int
    participant_email: str
    participant_phone: str
    message: str = ""
    created: datetime | None = None
    camp: Camp | None = None


@dataclass
class ReviewReply:
    id: str
    review_id: str
    camp_owner_id: str
    reply_text: str
    created: datetime | None = None


@dataclass
class Review:
    id: str
    camp_id: str
    user_id: str
    participant_name: str
    participant_email: str
    rating: int
    review_text: str
    verification_token: str
    status: ReviewStatus = ReviewStatus.PENDING_EMAIL_VERIFICATION
    verified_at: datetime | None = None
    created: datetime | None = None
    replies: list[ReviewReply] = field(default_factory=list)
