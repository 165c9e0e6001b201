"""High-water mark for point of interest ids."""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from city_info_api.database import Base

POINT_OF_INTEREST_COUNTER_ID = 1


class PointOfInterestIdCounter(Base):
    """Single row holding the largest point of interest id ever assigned.

    Ids of deleted points of interest stay counted, so they are never handed
    out again.
    """

    __tablename__ = "point_of_interest_id_counter"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    last_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
