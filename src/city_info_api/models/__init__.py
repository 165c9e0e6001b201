"""SQLAlchemy models for the City Info database."""

from city_info_api.models.city import City
from city_info_api.models.id_counter import PointOfInterestIdCounter
from city_info_api.models.point_of_interest import PointOfInterest

__all__ = [
    "City",
    "PointOfInterest",
    "PointOfInterestIdCounter",
]
