"""Tests for the camp owner router."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from api.dependencies import (
    get_booking_repository,
    get_camp_repository,
    get_image_storage,
    get_review_repository,
    get_submission_limits,
)
from api.routers import owner
from hoopcamps.models import CampImage
from hoopcamps.validation import SubmissionLimits


@pytest.fixture
def camps():
    return AsyncMock()


@pytest.fixture
def client(make_client, owner_session, camps):
    return make_client(
        owner.router,
        session=owner_session,
        overrides={
            get_camp_repository: lambda: camps,
            get_booking_repository: lambda: AsyncMock(),
            get_review_repository: lambda: AsyncMock(),
            get_image_storage: lambda: AsyncMock(),
            get_submission_limits: lambda: SubmissionLimits(),
        },
    )


def update_body(**overrides):
    body = {
        "camp_name": "Hoops Academy",
        "camp_email": "camp@example.com",
        "country_id": "gr",
        "location": "Athens",
        "description": "New description",
        "age_group_min": 8,
        "age_group_max": 14,
        "gender": "boys",
        "capacity": 30,
        "start_date": "2025-07-01",
        "end_date": "2025-07-10",
        "price": "300",
    }
    body.update(overrides)
    return body


def test_my_camps(client, camps, camp_factory):
    camps.list_for_owner.return_value = [camp_factory("a"), camp_factory("b")]
    camps.images_for_camps.return_value = {}

    response = client.get("/api/owner/camps")

    assert [c["id"] for c in response.json()] == ["a", "b"]
    camps.list_for_owner.assert_awaited_once_with("owner1")


def test_slow_dashboard_is_504(client, camps):
    async def slow(owner_id):
        await asyncio.sleep(1)
        return []

    camps.list_for_owner.side_effect = slow

    with patch("api.routers.owner.get_settings") as settings:
        settings.return_value.owner_dashboard_timeout_seconds = 0.01
        response = client.get("/api/owner/camps")

    assert response.status_code == 504
    assert response.json() == {"detail": "Failed to load camps. Please try refreshing the page."}


def test_update_own_camp(client, camps, camp_factory):
    camps.get.return_value = camp_factory()

    response = client.put("/api/owner/camps/camp1", json=update_body())

    assert response.status_code == 200
    args = camps.update_details.await_args.args
    assert args[0] == "camp1"
    assert args[3:] == ("2025-07-01", "2025-07-10", 10, 300.0)


def test_update_someone_elses_camp(client, camps, camp_factory):
    camps.get.return_value = camp_factory(owner_id="other-owner")

    response = client.put("/api/owner/camps/camp1", json=update_body())

    assert response.status_code == 403
    camps.update_details.assert_not_awaited()


def test_update_with_bad_dates(client, camps):
    response = client.put("/api/owner/camps/camp1", json=update_body(end_date="2025-06-01"))

    assert response.status_code == 422
    camps.get.assert_not_awaited()


def test_set_cover(client, camps, camp_factory):
    camps.get.return_value = camp_factory()
    camps.list_images.return_value = [
        CampImage(id="i0", camp_id="camp1", image_url="u0", image_order=0),
        CampImage(id="i1", camp_id="camp1", image_url="u1", image_order=1),
        CampImage(id="i2", camp_id="camp1", image_url="u2", image_order=2),
    ]

    response = client.post("/api/owner/camps/camp1/images/i2/cover")

    assert [img["id"] for img in response.json()] == ["i2", "i0", "i1"]


def test_delete_last_image_refused(client, camps, camp_factory):
    camps.get.return_value = camp_factory()
    camps.list_images.return_value = [CampImage(id="i0", camp_id="camp1", image_url="u0", image_order=0)]

    response = client.delete("/api/owner/camps/camp1/images/i0")

    assert response.status_code == 422
    camps.delete_image.assert_not_awaited()


def test_regular_user_forbidden(make_client, regular_session):
    client = make_client(owner.router, session=regular_session)
    assert client.get("/api/owner/camps").status_code == 403
