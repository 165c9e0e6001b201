"""City read endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from city_info_api.dependencies import ResourceId, get_city_info_repository
from city_info_api.mapping import to_city, to_city_without_points_of_interest
from city_info_api.repositories import CityInfoRepository
from city_info_api.schemas import City, CityWithoutPointsOfInterest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("", response_model=list[CityWithoutPointsOfInterest])
async def list_cities(
    repo: CityInfoRepository = Depends(get_city_info_repository),
) -> list[CityWithoutPointsOfInterest]:
    """List all cities, without their points of interest."""
    cities = await repo.get_cities()
    return [to_city_without_points_of_interest(c) for c in cities]


@router.get(
    "/{city_id}",
    response_model=None,
    responses={
        200: {"model": City, "description": "The city, with points of interest if requested"},
        404: {"description": "City not found"},
    },
)
async def get_city(
    city_id: ResourceId,
    include_points_of_interest: bool = Query(
        default=False,
        alias="includePointsOfInterest",
        description="Include the city's points of interest",
    ),
    repo: CityInfoRepository = Depends(get_city_info_repository),
) -> City | CityWithoutPointsOfInterest:
    """Get a city by ID."""
    city = await repo.get_city(city_id, include_points_of_interest)
    if city is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"City {city_id} not found",
        )

    if include_points_of_interest:
        return to_city(city)
    return to_city_without_points_of_interest(city)
