"""Tests for the camp submission router (multipart intake)."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from api.dependencies import (
    get_country_repository,
    get_image_storage,
    get_notifier,
    get_submission_limits,
    get_submission_repository,
)
from api.routers import submissions as submissions_router
from hoopcamps.storage import StoredObject
from hoopcamps.validation import SubmissionLimits


@pytest.fixture
def submissions():
    repo = AsyncMock()
    repo.owner_has_submissions.return_value = True
    repo.create.return_value = "sub-new"
    repo.add_date_range.side_effect = ["d1", "d2"]
    repo.add_image.side_effect = lambda submission_id, url, order: f"row{order}"
    return repo


@pytest.fixture
def storage():
    mock = AsyncMock()
    mock.upload.side_effect = lambda prefix, order, image: StoredObject(
        key=f"{prefix}/1-{order}.jpg", public_url=f"https://cdn/{image.filename}", record_id=f"obj{order}"
    )
    return mock


@pytest.fixture
def client(make_client, owner_session, submissions, storage):
    countries = AsyncMock()
    countries.list_all.return_value = []
    return make_client(
        submissions_router.router,
        session=owner_session,
        overrides={
            get_submission_repository: lambda: submissions,
            get_image_storage: lambda: storage,
            get_notifier: lambda: AsyncMock(),
            get_submission_limits: lambda: SubmissionLimits(),
            get_country_repository: lambda: countries,
        },
    )


def form_data(**overrides) -> dict[str, str]:
    data = {
        "camp_name": "Hoops Academy",
        "camp_email": "camp@example.com",
        "country_id": "gr",
        "location": "Athens",
        "description": "Skills and games",
        "age_group_min": 8,
        "age_group_max": 14,
        "gender": "both",
        "capacity": 40,
        "profile_image_index": 1,
        "date_ranges": [
            {"start_date": "2025-07-01", "end_date": "2025-07-05", "price": "200", "commission": "10"},
            {"start_date": "2025-08-01", "end_date": "2025-08-05", "price": "220", "commission": "11"},
        ],
    }
    data.update(overrides)
    return {"data": json.dumps(data)}


def image_files(*names: str) -> list[tuple[str, tuple[str, bytes, str]]]:
    return [("images", (name, b"\xff\xd8jpeg", "image/jpeg")) for name in names]


def test_submit_creates_submission(client, submissions, storage):
    response = client.post("/api/submissions", data=form_data(), files=image_files("a.jpg", "b.jpg"))

    assert response.status_code == 201
    assert response.json() == {"submission_id": "sub-new", "status": "pending", "date_count": 2, "image_count": 2}
    # The profile photo (b.jpg) is stored at order 0
    urls = [call.args[1] for call in submissions.add_image.await_args_list]
    assert urls == ["https://cdn/b.jpg", "https://cdn/a.jpg"]


def test_validation_failure_writes_nothing(client, submissions, storage):
    data = form_data(
        date_ranges=[{"start_date": "2025-07-01", "end_date": "2025-07-05", "price": "200", "commission": "9.99"}]
    )

    response = client.post("/api/submissions", data=data, files=image_files("a.jpg"))

    assert response.status_code == 422
    assert response.json() == {"detail": "Commission amount is below the minimum required threshold"}
    submissions.create.assert_not_awaited()
    storage.upload.assert_not_awaited()


def test_malformed_json_is_422(client):
    response = client.post("/api/submissions", data={"data": "{not json"}, files=image_files("a.jpg"))
    assert response.status_code == 422


def test_no_images(client, submissions):
    response = client.post("/api/submissions", data=form_data(profile_image_index=0))

    assert response.status_code == 422
    assert response.json()["detail"] == "Please upload at least one image"


def test_regular_user_cannot_submit(make_client, regular_session):
    client = make_client(submissions_router.router, session=regular_session)

    response = client.post("/api/submissions", data=form_data(), files=image_files("a.jpg"))

    assert response.status_code == 403


def test_my_submissions(client, submissions, submission_factory):
    submissions.list_for_owner.return_value = [submission_factory("s1")]

    body = client.get("/api/submissions/mine").json()

    assert body[0]["id"] == "s1"
    assert len(body[0]["dates"]) == 2
