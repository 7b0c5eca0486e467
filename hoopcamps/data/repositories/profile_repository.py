"""Profile and country repositories."""

from __future__ import annotations

import logging
from typing import Any

from pocketbase import PocketBase

from ...errors import NotFoundError
from ...models import Country, UserProfile, UserType
from ..pocketbase_helpers import call_store, get_field

logger = logging.getLogger(__name__)

USERS_PROFILE = "users_profile"
COUNTRIES = "countries"


class ProfileRepository:
    """Repository for users_profile rows (id = auth user id)"""

    def __init__(self, pb_client: PocketBase) -> None:
        self.pb = pb_client

    async def get(self, user_id: str) -> UserProfile | None:
        try:
            record = await call_store(self.pb.collection(USERS_PROFILE).get_one, user_id)
        except NotFoundError:
            return None
        return profile_from_record(record)

    async def update(self, user_id: str, changes: dict[str, Any]) -> UserProfile:
        """Update editable profile fields. user_type is never written here."""
        data = {k: v for k, v in changes.items() if k in ("full_name", "phone", "country")}
        record = await call_store(self.pb.collection(USERS_PROFILE).update, user_id, data)
        logger.info(f"Updated profile {user_id}: {sorted(data)}")
        return profile_from_record(record)


class CountryRepository:
    def __init__(self, pb_client: PocketBase) -> None:
        self.pb = pb_client

    async def list_all(self) -> list[Country]:
        records = await call_store(self.pb.collection(COUNTRIES).get_full_list, query_params={"sort": "name"})
        return [
            Country(
                id=str(r.id),
                name=get_field(r, "name", ""),
                country_code=get_field(r, "country_code", ""),
            )
            for r in records
        ]


def profile_from_record(record: Any) -> UserProfile:
    raw_type = get_field(record, "user_type", UserType.REGULAR.value)
    try:
        user_type = UserType(raw_type)
    except ValueError:
        logger.warning(f"Unknown user_type '{raw_type}' on profile {get_field(record, 'id')}; treating as regular")
        user_type = UserType.REGULAR
    return UserProfile(
        id=str(get_field(record, "id", "")),
        user_type=user_type,
        full_name=get_field(record, "full_name", ""),
        phone=get_field(record, "phone") or None,
        country=get_field(record, "country") or None,
    )
