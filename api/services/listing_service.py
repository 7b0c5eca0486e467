"""Listing service - the public read path for camps and countries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from hoopcamps.errors import ValidationFailed
from hoopcamps.models import Camp, Country, Gender, Review

if TYPE_CHECKING:
    from hoopcamps.data.repositories import CampRepository, CountryRepository, ReviewRepository


@dataclass
class CampDetails:
    camp: Camp
    reviews: list[Review] = field(default_factory=list)

    @property
    def average_rating(self) -> Decimal | None:
        if not self.reviews:
            return None
        total = sum(Decimal(r.rating) for r in self.reviews)
        return (total / len(self.reviews)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def parse_months(values: Iterable[int | str]) -> set[int]:
    months: set[int] = set()
    for value in values:
        try:
            month = int(value)
        except (TypeError, ValueError):
            raise ValidationFailed(f"Invalid month: {value}") from None
        if not 1 <= month <= 12:
            raise ValidationFailed(f"Invalid month: {value}")
        months.add(month)
    return months


def filter_by_month(camps: list[Camp], months: set[int]) -> list[Camp]:
    """In-memory start-month filter applied after the store query."""
    if not months:
        return camps
    return [camp for camp in camps if camp.start_date.month in months]


def group_by_country(camps: list[Camp]) -> dict[str, list[Camp]]:
    """Display grouping; keys keep the order countries first appear in."""
    grouped: dict[str, list[Camp]] = {}
    for camp in camps:
        name = camp.country.name if camp.country else "Other"
        grouped.setdefault(name, []).append(camp)
    return grouped


class ListingService:
    def __init__(self, camps: CampRepository, countries: CountryRepository, reviews: ReviewRepository) -> None:
        self.camps = camps
        self.countries = countries
        self.reviews = reviews

    async def list_countries(self) -> list[Country]:
        return await self.countries.list_all()

    async def list_camps(
        self,
        country_ids: list[str] | None = None,
        gender: Gender | None = None,
        months: Iterable[int | str] = (),
    ) -> list[Camp]:
        """Approved camps matching every selected filter, by start date."""
        wanted_months = parse_months(months)
        camps = await self.camps.list_approved(country_ids or None, gender)
        camps = filter_by_month(camps, wanted_months)

        images = await self.camps.images_for_camps([c.id for c in camps])
        for camp in camps:
            camp.images = images.get(camp.id, [])
        return camps

    async def camp_details(self, camp_id: str) -> CampDetails:
        camp = await self.camps.get(camp_id, approved_only=True)
        camp.images = await self.camps.list_images(camp_id)
        reviews = await self.reviews.list_published_for_camp(camp_id)
        return CampDetails(camp=camp, reviews=reviews)
