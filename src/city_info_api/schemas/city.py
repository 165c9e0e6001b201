"""City schemas - with and without nested points of interest."""

from pydantic import BaseModel, Field, computed_field

from city_info_api.schemas.point_of_interest import PointOfInterest


class CityWithoutPointsOfInterest(BaseModel):
    """City summary used by the list endpoint."""

    id: int
    name: str
    description: str | None = None


class City(BaseModel):
    """A city including its points of interest."""

    id: int
    name: str
    description: str | None = None
    points_of_interest: list[PointOfInterest] = Field(default_factory=list)

    @computed_field
    @property
    def number_of_points_of_interest(self) -> int:
        return len(self.points_of_interest)
