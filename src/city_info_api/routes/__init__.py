"""API routes for the City Info API."""

from city_info_api.routes.cities import router as cities_router
from city_info_api.routes.points_of_interest import router as points_of_interest_router

__all__ = [
    "cities_router",
    "points_of_interest_router",
]
