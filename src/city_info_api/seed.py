"""Demo data inserted into an empty database."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from city_info_api.models import City, PointOfInterest

logger = logging.getLogger(__name__)

SEED_CITIES = [
    {
        "id": 1,
        "name": "New York City",
        "description": "The one with that big park.",
        "points_of_interest": [
            (1, "Central Park", "The most visited urban park in US."),
            (2, "Empire State Building", "A 102-story skyscraper."),
        ],
    },
    {
        "id": 2,
        "name": "Antwerp",
        "description": "The one with the cathedral that was never really finished.",
        "points_of_interest": [
            (1, "Cathedral", "Not finished."),
            (2, "Something", "Bla bla bla."),
        ],
    },
    {
        "id": 3,
        "name": "Paris",
        "description": "The one with that big tower.",
        "points_of_interest": [
            (1, "Eiffel Tower", "Famous tower."),
            (2, "Something", "Bla bla bla."),
        ],
    },
]


def build_seed_cities() -> list[City]:
    """Fresh, unattached entities for the demo cities."""
    return [
        City(
            id=data["id"],
            name=data["name"],
            description=data["description"],
            points_of_interest=[
                PointOfInterest(id=poi_id, name=name, description=description)
                for poi_id, name, description in data["points_of_interest"]
            ],
        )
        for data in SEED_CITIES
    ]


async def ensure_seed_data(db: AsyncSession) -> bool:
    """Insert the demo cities unless the database already has cities.

    Returns True when data was inserted.
    """
    result = await db.execute(select(City.id).limit(1))
    if result.scalar_one_or_none() is not None:
        return False

    db.add_all(build_seed_cities())
    await db.commit()
    logger.info(f"Seeded {len(SEED_CITIES)} cities")
    return True
