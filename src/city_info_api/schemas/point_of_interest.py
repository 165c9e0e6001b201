"""Point of interest schemas - read, create and update shapes."""

from pydantic import BaseModel, Field

NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200


class PointOfInterestCreate(BaseModel):
    """Request model for creating a point of interest. The id is server-assigned."""

    name: str = Field(
        ..., min_length=1, max_length=NAME_MAX_LENGTH, description="Display name"
    )
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class PointOfInterestUpdate(BaseModel):
    """Request model for a full replace, also the target shape of a patch."""

    name: str = Field(
        ..., min_length=1, max_length=NAME_MAX_LENGTH, description="Display name"
    )
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class PointOfInterest(BaseModel):
    """A point of interest in a city."""

    id: int
    name: str
    description: str | None = None
