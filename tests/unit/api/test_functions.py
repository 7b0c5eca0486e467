"""Tests for the notification functions sub-application."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_camp_repository, get_review_repository
from api.functions import create_functions_app, get_resend_client, verification_url
from api.services.notifier import FUNCTIONS_SECRET_HEADER
from api.settings import Settings, get_settings
from hoopcamps.email import ResendClient
from hoopcamps.errors import NotFoundError, NotificationError
from hoopcamps.models import Review

SECRET = "functions-s3cret"


@pytest.fixture
def resend():
    client = AsyncMock()
    client.send.return_value = "email-123"
    return client


@pytest.fixture
def reviews():
    return AsyncMock()


@pytest.fixture
def camps():
    return AsyncMock()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        auth_mode="production",
        functions_secret=SECRET,
        admin_email="admin@camps.example.com",
        public_site_url="https://camps.example.com/",
        email_from="Camps <hello@camps.example.com>",
        review_email_from="reviews@camps.example.com",
    )


@pytest.fixture
def functions_app(resend, reviews, camps, settings):
    app = create_functions_app()
    app.dependency_overrides[get_resend_client] = lambda: resend
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_review_repository] = lambda: reviews
    app.dependency_overrides[get_camp_repository] = lambda: camps
    return app


@pytest.fixture
def client(functions_app):
    return TestClient(functions_app, headers={FUNCTIONS_SECRET_HEADER: SECRET})


def test_verification_url():
    assert verification_url("https://x.com/", "tok") == "https://x.com/verify-review?token=tok"


def test_approval_email(client, resend):
    response = client.post(
        "/send-camp-approval-email",
        json={"campName": "Hoops", "campEmail": "camp@example.com", "ownerName": "Olga"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "emailId": "email-123"}
    to, subject, html, from_addr = resend.send.await_args.args
    assert to == ["camp@example.com"]
    assert subject == "Congratulations! Hoops is Now Live"
    assert "Olga" in html
    assert from_addr == "Camps <hello@camps.example.com>"


def test_rejection_email(client, resend):
    response = client.post(
        "/send-camp-rejection-email",
        json={"campName": "Hoops", "campEmail": "camp@example.com", "ownerName": "Olga", "rejectionReason": "Blurry"},
    )

    assert response.status_code == 200
    assert "Blurry" in resend.send.await_args.args[2]


def test_provider_failure_is_500(client, resend):
    resend.send.side_effect = NotificationError("Failed to send email: bad from")

    response = client.post(
        "/send-camp-approval-email",
        json={"campName": "Hoops", "campEmail": "camp@example.com", "ownerName": "Olga"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to send email: bad from"}


class TestReviewVerification:
    def test_missing_review_id(self, client):
        response = client.post("/send-review-verification", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing reviewId"}

    def test_unknown_review(self, client, reviews):
        reviews.get.side_effect = NotFoundError("Review not found")

        response = client.post("/send-review-verification", json={"reviewId": "r1"})

        assert response.status_code == 404

    def test_sends_link_to_participant(self, client, reviews, camps, resend, camp_factory):
        reviews.get.return_value = Review(
            id="r1",
            camp_id="camp1",
            user_id="u1",
            participant_name="Rafa",
            participant_email="rafa@example.com",
            rating=5,
            review_text="Great",
            verification_token="tok123",
        )
        camps.get.return_value = camp_factory()

        response = client.post("/send-review-verification", json={"reviewId": "r1"})

        assert response.status_code == 200
        to, subject, html, from_addr = resend.send.await_args.args
        assert to == ["rafa@example.com"]
        assert "https://camps.example.com/verify-review?token=tok123" in html
        assert "Hoops Summer Camp" in html
        assert from_addr == "reviews@camps.example.com"

    def test_camp_lookup_failure_still_sends(self, client, reviews, camps, resend):
        reviews.get.return_value = Review(
            id="r1",
            camp_id="gone",
            user_id="u1",
            participant_name="Rafa",
            participant_email="rafa@example.com",
            rating=4,
            review_text="Good",
            verification_token="tok",
        )
        camps.get.side_effect = NotFoundError("Camp not found")

        assert client.post("/send-review-verification", json={"reviewId": "r1"}).status_code == 200
        resend.send.assert_awaited_once()


def test_submission_notification_goes_to_admin(client, resend):
    payload = {
        "campName": "Hoops",
        "ownerName": "Olga",
        "ownerEmail": "olga@example.com",
        "campDates": [{"startDate": "2025-07-01", "endDate": "2025-07-05", "price": "200", "days": 5}],
        "imageUrls": ["https://cdn/0.jpg"],
        "profileImageUrl": "https://cdn/0.jpg",
    }

    response = client.post("/send-camp-submission-notification", json=payload)

    assert response.status_code == 200
    to, subject, html, _ = resend.send.await_args.args
    assert to == ["admin@camps.example.com"]
    assert subject == "New Camp Submission: Hoops"
    assert "2025-07-05" in html


def test_preflight_allows_any_origin(client):
    response = client.options(
        "/send-camp-approval-email",
        headers={"Origin": "https://elsewhere.example.com", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


class TestSharedSecret:
    REJECTION = {"campName": "Hoops", "campEmail": "someone@elsewhere.example", "ownerName": "Olga", "rejectionReason": "x"}

    def test_anonymous_request_is_refused(self, functions_app, resend):
        response = TestClient(functions_app).post("/send-camp-rejection-email", json=self.REJECTION)

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        resend.send.assert_not_awaited()

    def test_wrong_secret_is_refused(self, functions_app, resend):
        anonymous = TestClient(functions_app, headers={FUNCTIONS_SECRET_HEADER: "guess"})

        assert anonymous.post("/send-camp-rejection-email", json=self.REJECTION).status_code == 401
        resend.send.assert_not_awaited()

    @pytest.mark.parametrize(
        "path", ["/send-camp-approval-email", "/send-review-verification", "/send-camp-submission-notification"]
    )
    def test_every_handler_requires_secret(self, functions_app, resend, path):
        assert TestClient(functions_app).post(path, json={}).status_code == 401

    def test_unset_secret_refuses_in_production(self, functions_app, settings, resend):
        functions_app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={"functions_secret": ""})

        response = TestClient(functions_app, headers={FUNCTIONS_SECRET_HEADER: ""}).post(
            "/send-camp-rejection-email", json=self.REJECTION
        )

        assert response.status_code == 401
        resend.send.assert_not_awaited()

    def test_bypass_mode_without_secret_allows_local_calls(self, functions_app, settings, resend):
        local = settings.model_copy(update={"functions_secret": "", "auth_mode": "bypass"})
        functions_app.dependency_overrides[get_settings] = lambda: local

        with patch("api.settings._is_docker_environment", return_value=False):
            response = TestClient(functions_app).post("/send-camp-rejection-email", json=self.REJECTION)

        assert response.status_code == 200
        resend.send.assert_awaited_once()


def test_unreadable_provider_reply_is_500(functions_app, settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>gateway</html>"))
    resend = ResendClient("re_test", client=httpx.AsyncClient(transport=transport))
    functions_app.dependency_overrides[get_resend_client] = lambda: resend

    response = TestClient(functions_app, headers={FUNCTIONS_SECRET_HEADER: SECRET}).post(
        "/send-camp-approval-email",
        json={"campName": "Hoops", "campEmail": "camp@example.com", "ownerName": "Olga"},
    )

    assert response.status_code == 500
    assert "provider response" in response.json()["error"]
