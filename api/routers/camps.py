"""
Camps Router - public listing, camp details and countries.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from hoopcamps.data.repositories import CampRepository, CountryRepository, ReviewRepository
from hoopcamps.models import Gender

from ..dependencies import get_camp_repository, get_country_repository, get_review_repository
from ..schemas.camps import CampDetailsResponse, CampListResponse, CampResponse, CountryResponse
from ..schemas.reviews import ReviewResponse
from ..services.listing_service import ListingService, group_by_country

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["camps"])


def get_listing_service(
    camps: CampRepository = Depends(get_camp_repository),
    countries: CountryRepository = Depends(get_country_repository),
    reviews: ReviewRepository = Depends(get_review_repository),
) -> ListingService:
    return ListingService(camps, countries, reviews)


@router.get("/countries", response_model=list[CountryResponse])
async def list_countries(service: ListingService = Depends(get_listing_service)) -> list[CountryResponse]:
    """All countries, by name."""
    return [CountryResponse.from_model(c) for c in await service.list_countries()]


@router.get("/camps", response_model=CampListResponse)
async def list_camps(
    country: list[str] = Query(default=[], description="Country ids (any of)"),
    gender: Gender | None = Query(default=None),
    month: list[int] = Query(default=[], description="Start months 1-12 (any of)"),
    grouped: bool = Query(default=False),
    service: ListingService = Depends(get_listing_service),
) -> CampListResponse:
    """Approved camps matching the selected filters, by start date."""
    camps = await service.list_camps(country_ids=country, gender=gender, months=month)
    responses = [CampResponse.from_model(c) for c in camps]

    groups = None
    if grouped:
        by_id = {r.id: r for r in responses}
        groups = {name: [by_id[c.id] for c in members] for name, members in group_by_country(camps).items()}

    logger.debug(f"Listing returned {len(responses)} camps (countries={country}, gender={gender}, months={month})")
    return CampListResponse(camps=responses, total=len(responses), grouped=groups)


@router.get("/camps/{camp_id}", response_model=CampDetailsResponse)
async def get_camp(camp_id: str, service: ListingService = Depends(get_listing_service)) -> CampDetailsResponse:
    """An approved camp with its images and published reviews."""
    details = await service.camp_details(camp_id)
    average = details.average_rating
    return CampDetailsResponse(
        camp=CampResponse.from_model(details.camp),
        reviews=[ReviewResponse.from_model(r) for r in details.reviews],
        review_count=len(details.reviews),
        average_rating=float(average) if average is not None else None,
    )
