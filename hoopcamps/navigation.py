"""Named routes with session guards.

Every page of the client is a named route with a guard. `resolve` decides
whether a session may open a route and, if not, where to send it instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import NotFoundError
from .models import UserType
from .session import UserSession


class GuardKind(Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ROLE = "role"


@dataclass(frozen=True)
class Route:
    name: str
    path: str
    guard: GuardKind = GuardKind.PUBLIC
    roles: frozenset[UserType] = frozenset()
    # Where a signed-in user with the wrong role is sent
    fallback: str = "landing"

    def allows(self, session: UserSession | None) -> bool:
        if self.guard is GuardKind.PUBLIC:
            return True
        if session is None:
            return False
        if self.guard is GuardKind.AUTHENTICATED:
            return True
        return session.user_type in self.roles

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "guard": self.guard.value,
            "roles": sorted(r.value for r in self.roles),
        }


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a route for a session."""

    requested: str
    route: Route
    redirected: bool

    def to_dict(self) -> dict[str, Any]:
        return {"requested": self.requested, "redirected": self.redirected, "route": self.route.to_dict()}


def _role(*types: UserType) -> frozenset[UserType]:
    return frozenset(types)


ROUTES: dict[str, Route] = {
    route.name: route
    for route in (
        Route("landing", "/"),
        Route("camps", "/camps"),
        Route("camp_details", "/camps/{campId}"),
        Route("auth", "/auth"),
        Route("my_bookings", "/my-bookings", GuardKind.AUTHENTICATED),
        Route(
            "my_reviews",
            "/my-reviews",
            GuardKind.ROLE,
            _role(UserType.REGULAR, UserType.CAMP_OWNER),
            fallback="camps",
        ),
        Route("submit_camp", "/submit-camp", GuardKind.ROLE, _role(UserType.CAMP_OWNER), fallback="camps"),
        Route("owner_dashboard", "/owner", GuardKind.ROLE, _role(UserType.CAMP_OWNER), fallback="camps"),
        Route("edit_camp", "/owner/camps/{campId}/edit", GuardKind.ROLE, _role(UserType.CAMP_OWNER), fallback="camps"),
        Route("admin", "/admin", GuardKind.ROLE, _role(UserType.ADMIN)),
    )
}

AUTH_ROUTE = "auth"


def get_route(name: str) -> Route:
    try:
        return ROUTES[name]
    except KeyError:
        raise NotFoundError(f"Unknown route: {name}") from None


def resolve(name: str, session: UserSession | None) -> Resolution:
    """Return the route the session ends up on when it asks for `name`.

    Anonymous visitors hitting a guarded route go to `auth`; signed-in users
    without the required role go to the route's fallback.
    """
    route = get_route(name)
    if route.allows(session):
        return Resolution(requested=name, route=route, redirected=False)
    target = AUTH_ROUTE if session is None else route.fallback
    return Resolution(requested=name, route=ROUTES[target], redirected=True)


def home_for(session: UserSession | None) -> Route:
    """Start route after sign-in (or for anonymous visitors)."""
    if session is None:
        return ROUTES["landing"]
    if session.is_admin:
        return ROUTES["admin"]
    if session.is_camp_owner:
        return ROUTES["owner_dashboard"]
    return ROUTES["camps"]


def allowed_routes(session: UserSession | None) -> list[Route]:
    return [route for route in ROUTES.values() if route.allows(session)]
