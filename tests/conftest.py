"""
Root test configuration and fixtures for HoopCamps.

Provides:
- a mock PocketBase client (and an autouse guard against real connections)
- record/session/domain factories shared by unit tests
"""

from __future__ import annotations

import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from unittest.mock import Mock, patch

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Never authenticate against a real PocketBase when api.main is imported
os.environ.setdefault("SKIP_PB_AUTH", "true")
os.environ.setdefault("POCKETBASE_ADMIN_PASSWORD", "test-password-not-default")

from hoopcamps.models import (  # noqa: E402
    Camp,
    CampImage,
    CampProfile,
    CampStatus,
    CampSubmission,
    Country,
    Gender,
    SubmissionDateRange,
    SubmissionImage,
    SubmissionStatus,
    UserProfile,
    UserType,
)
from hoopcamps.session import UserSession  # noqa: E402


def make_record(id: str = "rec1", expand: dict[str, Any] | None = None, **fields: Any) -> SimpleNamespace:
    """A PocketBase-like record: attribute access plus an `expand` dict."""
    return SimpleNamespace(id=id, expand=expand or {}, **fields)


def create_mock_pocketbase() -> Mock:
    """Create a comprehensive mock PocketBase instance."""
    mock_pb = Mock()

    mock_collection = Mock()
    mock_collection.auth_with_password = Mock(return_value=True)

    mock_list_response = Mock()
    mock_list_response.items = []
    mock_list_response.total_items = 0
    mock_list_response.total_pages = 1
    mock_list_response.page = 1
    mock_list_response.per_page = 30

    mock_collection.get_full_list = Mock(return_value=[])
    mock_collection.get_list = Mock(return_value=mock_list_response)
    mock_collection.get_one = Mock()
    mock_collection.create = Mock(return_value=make_record(id="mock-id"))
    mock_collection.update = Mock()
    mock_collection.delete = Mock()

    # Make collection callable to return itself for chaining
    mock_pb.collection = Mock(return_value=mock_collection)
    mock_pb.get_file_url = Mock(return_value="http://pb.local/api/files/storage_objects/mock-id/file.jpg")

    mock_pb.auth_store = Mock()
    mock_pb.auth_store.base_token = "mock-token"
    mock_pb.auth_store.base_model = Mock()

    return mock_pb


@pytest.fixture
def mock_pocketbase() -> Mock:
    """Create a mock PocketBase instance for tests that need it."""
    return create_mock_pocketbase()


@pytest.fixture(autouse=True)
def mock_all_external_services():
    """Automatically mock PocketBase to prevent real connections.

    Integration runs can opt out with SKIP_MOCKING=true.
    """
    if os.environ.get("SKIP_MOCKING") == "true":
        yield {}
        return

    mock_pb = create_mock_pocketbase()
    with patch("pocketbase.PocketBase") as mock_pb_class:
        mock_pb_class.return_value = mock_pb
        yield {"pocketbase": mock_pb}


# =============================================================================
# Sessions
# =============================================================================


def _session(user_id: str, user_type: UserType, name: str) -> UserSession:
    return UserSession(
        user_id=user_id,
        email=f"{user_id}@example.com",
        profile=UserProfile(id=user_id, user_type=user_type, full_name=name, phone="+30 210 000 0000"),
    )


@pytest.fixture
def admin_session() -> UserSession:
    return _session("admin1", UserType.ADMIN, "Ada Admin")


@pytest.fixture
def owner_session() -> UserSession:
    return _session("owner1", UserType.CAMP_OWNER, "Olga Owner")


@pytest.fixture
def regular_session() -> UserSession:
    return _session("user1", UserType.REGULAR, "Rafa Regular")


# =============================================================================
# Domain factories
# =============================================================================


def make_profile(**overrides: Any) -> CampProfile:
    values: dict[str, Any] = {
        "camp_name": "Hoops Summer Camp",
        "camp_email": "camp@example.com",
        "country_id": "gr",
        "location": "Athens",
        "description": "Skills, games and fun.",
        "age_group_min": 8,
        "age_group_max": 14,
        "gender": Gender.BOTH,
        "capacity": 40,
    }
    values.update(overrides)
    return CampProfile(**values)


def make_submission(
    submission_id: str = "sub1",
    status: SubmissionStatus = SubmissionStatus.PENDING,
    date_count: int = 2,
    image_count: int = 3,
    **overrides: Any,
) -> CampSubmission:
    dates = [
        SubmissionDateRange(
            id=f"d{i}",
            submission_id=submission_id,
            start_date=date(2025, 6 + i, 1),
            end_date=date(2025, 6 + i, 5),
            duration_days=5,
            price=Decimal("200.00"),
            commission=Decimal("10.00"),
        )
        for i in range(date_count)
    ]
    images = [
        SubmissionImage(
            id=f"img{i}",
            submission_id=submission_id,
            image_url=f"http://cdn.example.com/{submission_id}/{i}.jpg",
            image_order=i,
        )
        for i in range(image_count)
    ]
    values: dict[str, Any] = {
        "id": submission_id,
        "owner_id": "owner1",
        "profile": make_profile(),
        "status": status,
        "owner_name": "Olga Owner",
        "owner_email": "olga@example.com",
        "owner_phone": "+30 210 000 0000",
        "dates": dates,
        "images": images,
    }
    values.update(overrides)
    return CampSubmission(**values)


def make_camp(camp_id: str = "camp1", start: date = date(2025, 6, 1), **overrides: Any) -> Camp:
    values: dict[str, Any] = {
        "id": camp_id,
        "owner_id": "owner1",
        "profile": make_profile(),
        "start_date": start,
        "end_date": date(start.year, start.month, start.day + 4),
        "duration_days": 5,
        "price": Decimal("250.00"),
        "status": CampStatus.APPROVED,
        "commission": Decimal("12.50"),
        "country": Country(id="gr", name="Greece", country_code="GR"),
        "images": [CampImage(id=f"{camp_id}-img0", camp_id=camp_id, image_url="http://cdn/c0.jpg", image_order=0)],
    }
    values.update(overrides)
    return Camp(**values)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def profile_factory():
    return make_profile


@pytest.fixture
def submission_factory():
    return make_submission


@pytest.fixture
def camp_factory():
    return make_camp
