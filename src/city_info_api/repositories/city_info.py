"""City info repository - data access for cities and their points of interest.

One repository wraps one request-scoped session. Mutations are only staged
on the session; nothing becomes visible to other requests until ``save``
commits them.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from city_info_api.models import City as CityModel
from city_info_api.models import PointOfInterest as PointOfInterestModel
from city_info_api.models import PointOfInterestIdCounter
from city_info_api.models.id_counter import POINT_OF_INTEREST_COUNTER_ID

logger = logging.getLogger(__name__)


class CityInfoRepository:
    """Reads and stages writes of cities and points of interest."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def city_exists(self, city_id: int) -> bool:
        """Check whether a city exists."""
        result = await self.db.execute(select(CityModel.id).where(CityModel.id == city_id))
        return result.scalar_one_or_none() is not None

    async def get_cities(self) -> list[CityModel]:
        """List all cities ordered by name, without their points of interest."""
        result = await self.db.execute(select(CityModel).order_by(CityModel.name))
        return list(result.scalars().all())

    async def get_city(
        self, city_id: int, include_points_of_interest: bool = False
    ) -> CityModel | None:
        """Get a city by ID, optionally with its points of interest loaded."""
        query = select(CityModel).where(CityModel.id == city_id)
        if include_points_of_interest:
            query = query.options(selectinload(CityModel.points_of_interest))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_points_of_interest_for_city(self, city_id: int) -> list[PointOfInterestModel]:
        """List a city's points of interest. Empty when the city doesn't exist."""
        result = await self.db.execute(
            select(PointOfInterestModel)
            .where(PointOfInterestModel.city_id == city_id)
            .order_by(PointOfInterestModel.id)
        )
        return list(result.scalars().all())

    async def get_point_of_interest_for_city(
        self, city_id: int, poi_id: int
    ) -> PointOfInterestModel | None:
        """Get a single point of interest of a city."""
        result = await self.db.execute(
            select(PointOfInterestModel).where(
                PointOfInterestModel.city_id == city_id,
                PointOfInterestModel.id == poi_id,
            )
        )
        return result.scalar_one_or_none()

    async def add_point_of_interest_for_city(
        self, city_id: int, poi: PointOfInterestModel
    ) -> None:
        """Stage a new point of interest under a city.

        The new id is one more than the highest point of interest id ever
        assigned in the whole store, not just in this city. Ids of deleted
        points of interest are not reused. Nothing is staged when the city
        doesn't exist.
        """
        city = await self.get_city(city_id, include_points_of_interest=True)
        if city is None:
            logger.warning(f"City {city_id} not found, point of interest not added")
            return

        # Must run before the new entity joins the session, or autoflush
        # would try to insert it without an id
        poi.id = await self._next_point_of_interest_id()
        city.points_of_interest.append(poi)

    async def delete_point_of_interest(self, poi: PointOfInterestModel) -> None:
        """Stage removal of a point of interest."""
        # Keep the removed id counted; seeded rows never touched the counter
        counter = await self._id_counter()
        counter.last_id = max(counter.last_id, poi.id)
        await self.db.delete(poi)

    async def save(self) -> bool:
        """Commit staged changes.

        Returns False instead of raising when the store rejects the commit;
        the session is rolled back so none of the staged changes land.
        """
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to commit changes: {e}")
            await self.db.rollback()
            return False
        return True

    async def _id_counter(self) -> PointOfInterestIdCounter:
        counter = await self.db.get(PointOfInterestIdCounter, POINT_OF_INTEREST_COUNTER_ID)
        if counter is None:
            counter = PointOfInterestIdCounter(id=POINT_OF_INTEREST_COUNTER_ID, last_id=0)
            self.db.add(counter)
        return counter

    async def _next_point_of_interest_id(self) -> int:
        """Reserve the next id, never reusing one a deleted entity held.

        The counter bump is staged on the session, so a failed ``save`` rolls
        it back together with the insert.
        """
        result = await self.db.execute(select(func.max(PointOfInterestModel.id)))
        live_max = result.scalar_one_or_none() or 0

        counter = await self._id_counter()
        counter.last_id = max(counter.last_id, live_max) + 1
        return counter.last_id
