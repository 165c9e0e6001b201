"""Tests for entity/schema projections."""

from city_info_api.mapping import (
    apply_update,
    point_of_interest_from_create,
    to_city,
    to_city_without_points_of_interest,
    to_point_of_interest,
    to_point_of_interest_update,
)
from city_info_api.models import City as CityModel
from city_info_api.models import PointOfInterest as PointOfInterestModel
from city_info_api.schemas import PointOfInterestCreate, PointOfInterestUpdate


def make_city() -> CityModel:
    return CityModel(
        id=3,
        name="Paris",
        description="The one with that big tower.",
        points_of_interest=[
            PointOfInterestModel(id=1, name="Eiffel Tower", description="Famous tower."),
            PointOfInterestModel(id=2, name="Something", description=None),
        ],
    )


class TestCityProjections:
    def test_city_without_points_of_interest(self):
        summary = to_city_without_points_of_interest(make_city())
        assert summary.model_dump() == {
            "id": 3,
            "name": "Paris",
            "description": "The one with that big tower.",
        }

    def test_city_with_points_of_interest(self):
        city = to_city(make_city())
        assert city.number_of_points_of_interest == 2
        assert [p.id for p in city.points_of_interest] == [1, 2]
        assert city.points_of_interest[1].description is None


class TestPointOfInterestProjections:
    def test_create_does_not_copy_an_id(self):
        entity = point_of_interest_from_create(
            PointOfInterestCreate(name="Louvre", description="Museum.")
        )
        assert entity.id is None
        assert entity.name == "Louvre"
        assert entity.description == "Museum."

    def test_apply_update_overwrites_in_place(self):
        entity = PointOfInterestModel(city_id=3, id=1, name="Eiffel Tower", description="Famous tower.")
        apply_update(PointOfInterestUpdate(name="La tour Eiffel"), entity)
        assert entity.name == "La tour Eiffel"
        assert entity.description is None
        assert entity.id == 1
        assert entity.city_id == 3

    def test_round_trip_keeps_unchanged_fields(self):
        """entity -> update shape -> entity changes only what was edited."""
        entity = PointOfInterestModel(city_id=2, id=1, name="Cathedral", description="Not finished.")
        before = to_point_of_interest(entity)

        update = to_point_of_interest_update(entity)
        update = update.model_copy(update={"name": "Cathedral of Our Lady"})
        apply_update(update, entity)

        after = to_point_of_interest(entity)
        assert after.id == before.id
        assert after.description == before.description
        assert after.name == "Cathedral of Our Lady"
