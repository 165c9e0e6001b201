"""City model - the root of the city/point of interest hierarchy."""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from city_info_api.database import Base

if TYPE_CHECKING:
    from city_info_api.models.point_of_interest import PointOfInterest


class City(Base):
    """A city owning an ordered collection of points of interest."""

    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)

    # Points of interest live and die with their city
    points_of_interest: Mapped[list["PointOfInterest"]] = relationship(
        "PointOfInterest",
        back_populates="city",
        cascade="all, delete-orphan",
        order_by="PointOfInterest.id",
    )
