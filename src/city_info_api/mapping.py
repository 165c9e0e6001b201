"""Projections between SQLAlchemy entities and transfer schemas.

Every function copies fields explicitly; none of them touch the session.
Callers converting a city with children must have loaded the
``points_of_interest`` relationship first.
"""

from city_info_api.models import City as CityModel
from city_info_api.models import PointOfInterest as PointOfInterestModel
from city_info_api.schemas import (
    City,
    CityWithoutPointsOfInterest,
    PointOfInterest,
    PointOfInterestCreate,
    PointOfInterestUpdate,
)


def to_city_without_points_of_interest(city: CityModel) -> CityWithoutPointsOfInterest:
    """Convert a city entity to its summary shape."""
    return CityWithoutPointsOfInterest(
        id=city.id,
        name=city.name,
        description=city.description,
    )


def to_city(city: CityModel) -> City:
    """Convert a city entity, with its points of interest, to the full shape."""
    return City(
        id=city.id,
        name=city.name,
        description=city.description,
        points_of_interest=[to_point_of_interest(p) for p in city.points_of_interest],
    )


def to_point_of_interest(poi: PointOfInterestModel) -> PointOfInterest:
    """Convert a point of interest entity to its read shape."""
    return PointOfInterest(
        id=poi.id,
        name=poi.name,
        description=poi.description,
    )


def point_of_interest_from_create(poi_create: PointOfInterestCreate) -> PointOfInterestModel:
    """Build a new, unattached entity. The repository assigns id and city."""
    return PointOfInterestModel(
        name=poi_create.name,
        description=poi_create.description,
    )


def apply_update(poi_update: PointOfInterestUpdate, poi: PointOfInterestModel) -> None:
    """Overwrite the entity's editable fields in place."""
    poi.name = poi_update.name
    poi.description = poi_update.description


def to_point_of_interest_update(poi: PointOfInterestModel) -> PointOfInterestUpdate:
    """Project an entity into the update shape (the patch target).

    ``model_construct`` skips validation so a stored value that no longer
    satisfies the schema still reaches the patch step, where it is re-validated.
    """
    return PointOfInterestUpdate.model_construct(
        name=poi.name,
        description=poi.description,
    )
