"""Pydantic schemas for API request/response models."""

from city_info_api.schemas.city import City, CityWithoutPointsOfInterest
from city_info_api.schemas.patch import PatchOperation, PatchOperationKind
from city_info_api.schemas.point_of_interest import (
    PointOfInterest,
    PointOfInterestCreate,
    PointOfInterestUpdate,
)

__all__ = [
    # City
    "City",
    "CityWithoutPointsOfInterest",
    # Point of interest
    "PointOfInterest",
    "PointOfInterestCreate",
    "PointOfInterestUpdate",
    # Patch
    "PatchOperation",
    "PatchOperationKind",
]
