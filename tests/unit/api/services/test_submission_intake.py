"""Tests for SubmissionIntakeService."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from api.services.submission_intake import SubmissionIntakeService, build_submission_summary
from hoopcamps.errors import FanOutError, StoreError, SubmissionValidationError
from hoopcamps.models import Country, ImageUpload, OwnerContact, SubmissionStatus
from hoopcamps.storage import StoredObject
from hoopcamps.validation import RawDateRange, SubmissionLimits, validate_submission


def images(count: int) -> list[ImageUpload]:
    return [ImageUpload(f"img{i}.jpg", "image/jpeg", b"data") for i in range(count)]


RANGES = [
    RawDateRange("2025-07-01", "2025-07-05", "200", "10"),
    RawDateRange("2025-08-01", "2025-08-10", "300", "15"),
]


@pytest.fixture
def submissions():
    repo = AsyncMock()
    repo.owner_has_submissions.return_value = True
    repo.create.return_value = "sub1"
    repo.add_date_range.side_effect = lambda submission_id, date_range: f"date-{date_range.start_date.month}"
    repo.add_image.side_effect = lambda submission_id, url, order: f"row{order}"
    return repo


@pytest.fixture
def storage():
    mock = AsyncMock()
    mock.upload.side_effect = lambda prefix, order, image: StoredObject(
        key=f"{prefix}/1-{order}.jpg", public_url=f"https://cdn/{image.filename}", record_id=f"obj-{image.filename}"
    )
    return mock


@pytest.fixture
def notifier():
    mock = AsyncMock()
    mock.submission_received.return_value = True
    return mock


@pytest.fixture
def countries():
    repo = AsyncMock()
    repo.list_all.return_value = [Country(id="gr", name="Greece", country_code="GR")]
    return repo


@pytest.fixture
def service(submissions, storage, notifier, countries):
    return SubmissionIntakeService(submissions, storage, notifier, SubmissionLimits(), countries)


@pytest.mark.asyncio
async def test_writes_submission_dates_and_images(service, submissions, storage, owner_session, profile_factory):
    result = await service.submit(owner_session, profile_factory(), RANGES, images(3), profile_image_index=2)

    assert result.submission_id == "sub1"
    assert result.status is SubmissionStatus.PENDING
    assert result.date_count == 2
    assert result.image_count == 3
    assert submissions.add_date_range.await_count == 2

    # Profile photo first, the rest in their original order
    assert [c.args[2].filename for c in storage.upload.await_args_list] == ["img2.jpg", "img0.jpg", "img1.jpg"]
    assert [c.args[1] for c in storage.upload.await_args_list] == [0, 1, 2]
    assert [(c.args[1], c.args[2]) for c in submissions.add_image.await_args_list] == [
        ("https://cdn/img2.jpg", 0),
        ("https://cdn/img0.jpg", 1),
        ("https://cdn/img1.jpg", 2),
    ]


@pytest.mark.asyncio
async def test_invalid_submission_writes_nothing(service, submissions, storage, owner_session, profile_factory):
    with pytest.raises(SubmissionValidationError):
        await service.submit(owner_session, profile_factory(description="x" * 10001), RANGES, images(1), 0)

    submissions.create.assert_not_awaited()
    storage.upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_first_submission_requires_contact(service, submissions, owner_session, profile_factory):
    submissions.owner_has_submissions.return_value = False

    with pytest.raises(SubmissionValidationError, match="first camp"):
        await service.submit(owner_session, profile_factory(), RANGES, images(1), 0)

    contact = OwnerContact("Olga", "olga@example.com", "+30 1")
    await service.submit(owner_session, profile_factory(), RANGES, images(1), 0, owner_contact=contact)
    assert submissions.create.await_args.args[2] is contact


@pytest.mark.asyncio
async def test_upload_failure_rolls_back(service, submissions, storage, owner_session, profile_factory):
    uploaded = []

    def upload(prefix, order, image):
        if order == 2:
            raise StoreError("bucket unavailable", status=503)
        stored = StoredObject(key=f"{prefix}/{order}", public_url=f"u{order}", record_id=f"obj{order}")
        uploaded.append(stored)
        return stored

    storage.upload.side_effect = upload

    with pytest.raises(FanOutError) as exc_info:
        await service.submit(owner_session, profile_factory(), RANGES, images(3), 0)

    assert exc_info.value.compensated is True
    assert "uploading image 3 of 3" in exc_info.value.step
    assert [c.args[0] for c in storage.delete.await_args_list] == list(reversed(uploaded))
    assert submissions.delete_date_range.await_count == 2
    submissions.delete.assert_awaited_once_with("sub1")
    submissions.add_image.assert_not_awaited()


@pytest.mark.asyncio
async def test_admin_notified_with_summary(service, notifier, owner_session, profile_factory):
    await service.submit(owner_session, profile_factory(), RANGES, images(2), 1)

    summary = notifier.submission_received.await_args.args[0]
    assert summary["campName"] == "Hoops Summer Camp"
    assert summary["country"] == "Greece"
    assert summary["profileImageUrl"] == "https://cdn/img1.jpg"
    assert summary["campDates"][1] == {"startDate": "2025-08-01", "endDate": "2025-08-10", "price": "300", "days": 10}


@pytest.mark.asyncio
async def test_notification_failure_does_not_fail_submission(service, notifier, countries, owner_session, profile_factory):
    notifier.submission_received.return_value = False
    countries.list_all.side_effect = StoreError("down")

    result = await service.submit(owner_session, profile_factory(), RANGES, images(1), 0)

    assert result.submission_id == "sub1"
    assert notifier.submission_received.await_args.args[0]["country"] == ""


def test_summary_falls_back_to_session_contact(owner_session, profile_factory):
    draft = validate_submission(profile_factory(), RANGES[:1], images(1), 0, None, False, SubmissionLimits())

    summary = build_submission_summary(owner_session, draft, ["https://cdn/a.jpg"])

    assert summary["ownerName"] == "Olga Owner"
    assert summary["ownerEmail"] == "owner1@example.com"
    assert summary["imageUrls"] == ["https://cdn/a.jpg"]
