"""
Navigation Router - named client routes and their guards.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from hoopcamps.auth_middleware import get_optional_session
from hoopcamps.navigation import allowed_routes, home_for, resolve
from hoopcamps.session import UserSession

router = APIRouter(prefix="/api/routes", tags=["navigation"])


@router.get("")
async def list_routes(session: UserSession | None = Depends(get_optional_session)) -> dict[str, Any]:
    """Routes the caller may open, plus where they start."""
    return {
        "home": home_for(session).name,
        "routes": [route.to_dict() for route in allowed_routes(session)],
    }


@router.get("/{name}")
async def resolve_route(name: str, session: UserSession | None = Depends(get_optional_session)) -> dict[str, Any]:
    """Resolve a route for the caller; unknown names are 404."""
    return resolve(name, session).to_dict()
