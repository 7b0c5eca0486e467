"""Fixtures for API router tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from api.main import register_exception_handlers
from hoopcamps.auth_middleware import get_optional_session
from hoopcamps.session import UserSession


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Build a TestClient for one router with the session and dependencies overridden.

    The role guards still run, so passing a regular session to an admin router
    exercises the 403 path.
    """

    def _make(
        router: APIRouter,
        session: UserSession | None = None,
        overrides: dict[Callable[..., Any], Callable[..., Any]] | None = None,
    ) -> TestClient:
        app = FastAPI()
        register_exception_handlers(app)
        app.include_router(router)
        app.dependency_overrides[get_optional_session] = lambda: session
        for dependency, override in (overrides or {}).items():
            app.dependency_overrides[dependency] = override
        return TestClient(app)

    return _make
