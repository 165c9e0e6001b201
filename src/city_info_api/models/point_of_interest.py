"""Point of interest model."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from city_info_api.database import Base

if TYPE_CHECKING:
    from city_info_api.models.city import City


class PointOfInterest(Base):
    """A point of interest inside a city.

    Identifiers are only unique within the owning city, so the primary key is
    the (city_id, id) pair. The repository assigns ``id`` on creation.
    """

    __tablename__ = "points_of_interest"

    city_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cities.id", ondelete="CASCADE"), primary_key=True
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)

    city: Mapped["City"] = relationship("City", back_populates="points_of_interest")

