"""Tests for the profile and navigation routers."""

from __future__ import annotations

from unittest.mock import AsyncMock

from api.dependencies import get_profile_repository
from api.routers import navigation, profile
from hoopcamps.models import UserProfile, UserType
from hoopcamps.session import UserSession


class TestProfile:
    def test_update(self, make_client, regular_session):
        profiles = AsyncMock()
        profiles.update.return_value = UserProfile(id="user1", user_type=UserType.REGULAR, full_name="New Name")
        client = make_client(profile.router, session=regular_session, overrides={get_profile_repository: lambda: profiles})

        response = client.patch("/api/profile", json={"full_name": "New Name"})

        assert response.status_code == 200
        assert response.json()["full_name"] == "New Name"
        profiles.update.assert_awaited_once_with("user1", {"full_name": "New Name"})

    def test_empty_update(self, make_client, regular_session):
        client = make_client(profile.router, session=regular_session, overrides={get_profile_repository: lambda: AsyncMock()})
        assert client.patch("/api/profile", json={}).status_code == 422

    def test_without_profile_row(self, make_client):
        session = UserSession(user_id="u9", email="u9@example.com")
        client = make_client(profile.router, session=session, overrides={get_profile_repository: lambda: AsyncMock()})

        assert client.patch("/api/profile", json={"phone": "123"}).status_code == 404


class TestNavigation:
    def test_anonymous_route_table(self, make_client):
        body = make_client(navigation.router).get("/api/routes").json()

        assert body["home"] == "landing"
        assert {r["name"] for r in body["routes"]} == {"landing", "camps", "camp_details", "auth"}

    def test_owner_home(self, make_client, owner_session):
        body = make_client(navigation.router, session=owner_session).get("/api/routes").json()
        assert body["home"] == "owner_dashboard"

    def test_resolve_redirects(self, make_client, regular_session):
        body = make_client(navigation.router, session=regular_session).get("/api/routes/admin").json()

        assert body["redirected"] is True
        assert body["route"]["name"] == "landing"

    def test_unknown_route(self, make_client):
        response = make_client(navigation.router).get("/api/routes/nowhere")
        assert response.status_code == 404
