"""FastAPI dependencies for the City Info API."""

from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from city_info_api.config import settings
from city_info_api.database import get_db
from city_info_api.mail import MailService, create_mail_service
from city_info_api.repositories import CityInfoRepository

# Ids are 32-bit integer columns; larger values can't name a stored row
MAX_RESOURCE_ID = 2**31 - 1

ResourceId = Annotated[int, Path(ge=1, le=MAX_RESOURCE_ID)]


async def get_city_info_repository(db: AsyncSession = Depends(get_db)) -> CityInfoRepository:
    """Repository bound to the request's session."""
    return CityInfoRepository(db)


def get_mail_service() -> MailService:
    """Notification sender selected by configuration."""
    return create_mail_service(settings)
