#!/usr/bin/env python3
"""
HoopCamps API - HTTP API layer for the basketball camp marketplace.

This FastAPI application is the backend-for-frontend for the camps web
client. It owns the business rules around:
- Camp submission intake and admin moderation
- Public listing, camp details, bookings and reviews
- The camp owner dashboard and camp editing
- Named client routes and their guards

The notification functions are mounted as a separate CORS-open
sub-application at /functions/v1.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Receive, Scope, Send

from hoopcamps.auth_middleware import AuthMiddleware, get_session
from hoopcamps.errors import (
    AccessDeniedError,
    DashboardTimeoutError,
    FanOutError,
    HoopCampsError,
    InvalidTransitionError,
    NotFoundError,
    StoreError,
    ValidationFailed,
)
from hoopcamps.logging_config import configure_logging, get_logger
from hoopcamps.session import UserSession

from .dependencies import auth_state, authenticate_pb, pb
from .functions import create_functions_app
from .settings import get_settings

# Configure unified logging format
# Format: 2026-01-06T14:05:52Z [api] LEVEL message
configure_logging(source="api")
logger = get_logger(__name__)

FUNCTIONS_PREFIX = "/functions/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()

    if not settings.skip_pb_auth:
        await authenticate_pb()
    else:
        logger.warning("Skipping PocketBase authentication (SKIP_PB_AUTH=true)")
        auth_state.pb_client = pb

    yield


class ApiCORSMiddleware(CORSMiddleware):
    """CORS for the API routes only. The functions sub-app answers CORS itself (open to all origins)."""

    def __init__(self, app: ASGIApp, exclude_prefix: str = FUNCTIONS_PREFIX, **kwargs: Any) -> None:
        super().__init__(app, **kwargs)
        self.exclude_prefix = exclude_prefix

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].startswith(self.exclude_prefix):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_exception_handlers(app: FastAPI) -> None:
    """Translate HoopCamps errors into HTTP responses."""

    @app.exception_handler(401)
    async def unauthorized_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(401, str(exc.detail) if hasattr(exc, "detail") else "Unauthorized")

    @app.exception_handler(403)
    async def forbidden_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(403, str(exc.detail) if hasattr(exc, "detail") else "Forbidden")

    @app.exception_handler(ValidationFailed)
    async def validation_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
        return _error(422, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(AccessDeniedError)
    async def access_denied_handler(request: Request, exc: AccessDeniedError) -> JSONResponse:
        return _error(403, str(exc))

    @app.exception_handler(InvalidTransitionError)
    async def transition_handler(request: Request, exc: InvalidTransitionError) -> JSONResponse:
        logger.warning(str(exc))
        return _error(409, str(exc))

    @app.exception_handler(FanOutError)
    async def fan_out_handler(request: Request, exc: FanOutError) -> JSONResponse:
        logger.error(f"{request.method} {request.url.path}: {exc} (compensated={exc.compensated})")
        return JSONResponse(
            status_code=502,
            content={"detail": str(exc), "step": exc.step, "compensated": exc.compensated},
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(f"{request.method} {request.url.path}: store error {exc.status}: {exc}")
        return _error(502, str(exc))

    @app.exception_handler(DashboardTimeoutError)
    async def timeout_handler(request: Request, exc: DashboardTimeoutError) -> JSONResponse:
        return _error(504, str(exc))

    @app.exception_handler(HoopCampsError)
    async def fallback_handler(request: Request, exc: HoopCampsError) -> JSONResponse:
        logger.error(f"{request.method} {request.url.path}: {type(exc).__name__}: {exc}")
        return _error(500, str(exc))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="HoopCamps API", description="Basketball camp marketplace API", lifespan=lifespan)

    register_exception_handlers(app)

    settings = get_settings()

    auth_mode = settings.get_effective_auth_mode()
    app.add_middleware(
        AuthMiddleware,
        auth_mode=auth_mode,
        pb_client=pb,
        pocketbase_url=settings.pocketbase_url,
    )

    # Added last so it wraps auth: 401 responses still carry CORS headers
    app.add_middleware(
        ApiCORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    from .routers import admin, bookings, camps, navigation, owner, profile, reviews, submissions

    app.include_router(camps.router)
    app.include_router(submissions.router)
    app.include_router(admin.router)
    app.include_router(bookings.router)
    app.include_router(reviews.router)
    app.include_router(owner.router)
    app.include_router(profile.router)
    app.include_router(navigation.router)

    app.mount(FUNCTIONS_PREFIX, create_functions_app())

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "hoopcamps-api"}

    @app.get("/api/config")
    async def get_auth_config() -> dict[str, Any]:
        """Get authentication configuration for frontend."""
        current_auth_mode = settings.get_effective_auth_mode()

        if current_auth_mode == "bypass":
            return {"auth_mode": "bypass"}

        return {
            "auth_mode": "production",
            "provider": "pocketbase",
            "pocketbase_url": settings.pocketbase_url,
            "auth_collection": "users",
        }

    @app.get("/api/user/me")
    async def get_current_user_info(session: UserSession = Depends(get_session)) -> dict[str, Any]:
        """Get current user information."""
        return session.to_dict()

    return app


# Create app instance for uvicorn
app = create_app()
