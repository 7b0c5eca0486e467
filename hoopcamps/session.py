"""The per-request session.

A UserSession is built once per request by the auth middleware and handed
to handlers as a FastAPI dependency, so every operation receives the
caller's identity and profile explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .models import UserProfile, UserType


@dataclass(frozen=True)
class UserSession:
    """Authenticated identity plus its users_profile row (if one exists)."""

    user_id: str
    email: str
    profile: UserProfile | None = None

    @property
    def user_type(self) -> UserType:
        return self.profile.user_type if self.profile else UserType.REGULAR

    @property
    def full_name(self) -> str:
        if self.profile and self.profile.full_name:
            return self.profile.full_name
        return self.email

    @property
    def is_admin(self) -> bool:
        return self.user_type is UserType.ADMIN

    @property
    def is_camp_owner(self) -> bool:
        return self.user_type is UserType.CAMP_OWNER

    def has_role(self, *user_types: UserType) -> bool:
        return self.user_type in user_types

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "user_type": self.user_type.value,
            "full_name": self.profile.full_name if self.profile else "",
            "phone": self.profile.phone if self.profile else None,
            "country": self.profile.country if self.profile else None,
            "is_admin": self.is_admin,
            "is_camp_owner": self.is_camp_owner,
        }


def dev_admin_session() -> UserSession:
    """Session used for every request when AUTH_MODE=bypass."""
    return UserSession(
        user_id="dev-admin",
        email="dev_admin@example.com",
        profile=UserProfile(id="dev-admin", user_type=UserType.ADMIN, full_name="Dev Admin"),
    )
