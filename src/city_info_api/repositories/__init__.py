"""Data access layer for the City Info API."""

from city_info_api.repositories.city_info import CityInfoRepository

__all__ = [
    "CityInfoRepository",
]
