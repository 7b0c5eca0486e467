"""
Authentication middleware - turns the bearer token into a UserSession.

Two modes:
- bypass: every request runs as a dev admin (development only; settings force
  production inside Docker)
- production: the token is validated against PocketBase and the caller's
  users_profile row is loaded
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from fastapi import Depends, HTTPException, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse, Response

from pocketbase import PocketBase

from .data.repositories.profile_repository import ProfileRepository
from .errors import HoopCampsError
from .jwt_auth import PocketBaseTokenValidator, extract_bearer_token
from .models import UserType
from .session import UserSession, dev_admin_session

logger = logging.getLogger(__name__)

# Paths that never require a session (a valid token is still honored)
PUBLIC_PATHS = {"/health", "/api/health", "/api/config", "/api/countries", "/api/routes"}
# /functions/ handlers check their own shared secret instead of a session
PUBLIC_PREFIXES = ("/functions/", "/api/routes/")


def is_public_request(method: str, path: str) -> bool:
    """Anonymous browsing: listing, camp details, countries, route table, functions."""
    if path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES):
        return True
    if method == "GET" and path.startswith("/api/camps"):
        # /api/camps and /api/camps/{id}; nested resources need a session
        return path.rstrip("/").count("/") <= 3
    return False


class AuthMiddleware(BaseHTTPMiddleware):
    """Attach `request.state.session` (UserSession or None) to every request."""

    def __init__(
        self,
        app: Any,
        auth_mode: str,
        pb_client: PocketBase | None = None,
        pocketbase_url: str = "http://127.0.0.1:8090",
        token_validator: PocketBaseTokenValidator | None = None,
    ):
        super().__init__(app)
        self.auth_mode = auth_mode.lower()
        self.pb = pb_client

        if self.auth_mode not in ["bypass", "production"]:
            raise ValueError(f"Invalid AUTH_MODE: {auth_mode}. Must be bypass or production")

        self.token_validator = token_validator or PocketBaseTokenValidator(pocketbase_url)
        logger.info(f"Authentication middleware initialized in {self.auth_mode} mode")

    async def _session_from_token(self, request: Request) -> UserSession | None:
        token = extract_bearer_token(request.headers.get("Authorization"))
        if not token:
            return None

        claims = await asyncio.to_thread(self.token_validator.validate_token, token)
        if not claims or not claims.get("sub"):
            logger.debug(f"Rejected token for {request.url.path}")
            return None

        profile = None
        if self.pb is not None:
            try:
                profile = await ProfileRepository(self.pb).get(claims["sub"])
            except HoopCampsError as e:
                logger.error(f"Failed to load profile for {claims['sub']}: {e}")

        if profile is None:
            logger.debug(f"No users_profile row for {claims['sub']}; treating as regular user")

        return UserSession(user_id=claims["sub"], email=claims.get("email", ""), profile=profile)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.auth_mode == "bypass":
            session: UserSession | None = dev_admin_session()
        else:
            session = await self._session_from_token(request)

        request.state.session = session

        if session is None and request.method != "OPTIONS" and not is_public_request(request.method, request.url.path):
            logger.warning(f"Unauthenticated request to {request.url.path}")
            # BaseHTTPMiddleware turns raised HTTPExceptions into 500s
            return JSONResponse(status_code=401, content={"detail": "Authentication required"})

        if session is not None:
            logger.debug(f"Authenticated request from {session.user_id} to {request.url.path}")

        return await call_next(request)


def get_optional_session(request: Request) -> UserSession | None:
    """Dependency: the caller's session, or None for anonymous visitors."""
    return getattr(request.state, "session", None)


def get_session(session: UserSession | None = Depends(get_optional_session)) -> UserSession:
    """
    Dependency to get the current authenticated session.

    Usage:
        @router.get("/api/bookings/mine")
        async def my_bookings(session: UserSession = Depends(get_session)):
            ...
    """
    if session is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return session


def require_role(*user_types: UserType) -> Callable[..., UserSession]:
    """
    Dependency factory for role-gated endpoints.

    Usage:
        @router.post("/api/admin/submissions/{id}/approve")
        async def approve(session: UserSession = Depends(require_role(UserType.ADMIN))):
            ...
    """
    allowed = ", ".join(t.value for t in user_types)

    def _guard(session: UserSession = Depends(get_session)) -> UserSession:
        if not session.has_role(*user_types):
            logger.warning(f"User {session.user_id} ({session.user_type.value}) denied; requires {allowed}")
            raise HTTPException(status_code=403, detail=f"Access denied. Requires role: {allowed}")
        return session

    return _guard


require_admin = require_role(UserType.ADMIN)
require_camp_owner = require_role(UserType.CAMP_OWNER)
