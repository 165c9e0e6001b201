"""Point of interest CRUD endpoints, nested under their city."""

import logging

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Body,
    Depends,
    HTTPException,
    Request,
    Response,
    status,
)

from city_info_api.dependencies import ResourceId, get_city_info_repository, get_mail_service
from city_info_api.mail import MailService, send_quietly
from city_info_api.mapping import (
    apply_update,
    point_of_interest_from_create,
    to_point_of_interest,
)
from city_info_api.models import PointOfInterest as PointOfInterestModel
from city_info_api.patching import patch_point_of_interest
from city_info_api.repositories import CityInfoRepository
from city_info_api.schemas import (
    PatchOperation,
    PointOfInterest,
    PointOfInterestCreate,
    PointOfInterestUpdate,
)
from city_info_api.validation import ValidationFailedError, ensure_name_differs_from_description

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cities/{city_id}/poi", tags=["points of interest"])

COMMIT_FAILED_DETAIL = "A problem happened while handling your request."


async def _verify_city_exists(repo: CityInfoRepository, city_id: int) -> None:
    """Raises HTTPException if the city doesn't exist."""
    if not await repo.city_exists(city_id):
        logger.info(f"City with id {city_id} was not found when accessing points of interest.")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"City {city_id} not found",
        )


async def _get_point_of_interest_or_404(
    repo: CityInfoRepository, city_id: int, poi_id: int
) -> PointOfInterestModel:
    """Look up a city's point of interest. Raises HTTPException if either is missing."""
    await _verify_city_exists(repo, city_id)
    poi = await repo.get_point_of_interest_for_city(city_id, poi_id)
    if poi is None:
        logger.info(f"Point of interest {poi_id} of city {city_id} was not found.")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Point of interest {poi_id} not found",
        )
    return poi


async def _save_or_500(repo: CityInfoRepository) -> None:
    """Commit the request's changes. Raises HTTPException if the commit fails."""
    if not await repo.save():
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=COMMIT_FAILED_DETAIL,
        )


def _check_domain_rules(poi: PointOfInterestCreate | PointOfInterestUpdate) -> None:
    try:
        ensure_name_differs_from_description(poi.name, poi.description)
    except ValidationFailedError as e:
        logger.warning(f"Rejected point of interest '{poi.name}': {e.errors}")
        raise


# ============================================================================
# Reads
# ============================================================================


@router.get("", response_model=list[PointOfInterest])
async def list_points_of_interest(
    city_id: ResourceId,
    repo: CityInfoRepository = Depends(get_city_info_repository),
) -> list[PointOfInterest]:
    """List all points of interest of a city."""
    await _verify_city_exists(repo, city_id)
    pois = await repo.get_points_of_interest_for_city(city_id)
    return [to_point_of_interest(p) for p in pois]


@router.get("/{poi_id}", response_model=PointOfInterest)
async def get_point_of_interest(
    city_id: ResourceId,
    poi_id: ResourceId,
    repo: CityInfoRepository = Depends(get_city_info_repository),
) -> PointOfInterest:
    """Get a single point of interest."""
    poi = await _get_point_of_interest_or_404(repo, city_id, poi_id)
    return to_point_of_interest(poi)


# ============================================================================
# Writes
# ============================================================================


@router.post(
    "",
    response_model=PointOfInterest,
    status_code=status.HTTP_201_CREATED,
)
async def create_point_of_interest(
    city_id: ResourceId,
    poi_create: PointOfInterestCreate,
    request: Request,
    response: Response,
    repo: CityInfoRepository = Depends(get_city_info_repository),
) -> PointOfInterest:
    """Create a point of interest. The id is assigned by the server."""
    _check_domain_rules(poi_create)
    await _verify_city_exists(repo, city_id)

    poi = point_of_interest_from_create(poi_create)
    await repo.add_point_of_interest_for_city(city_id, poi)
    await _save_or_500(repo)

    created = to_point_of_interest(poi)
    response.headers["Location"] = str(
        request.url_for("get_point_of_interest", city_id=city_id, poi_id=created.id)
    )
    return created


@router.put("/{poi_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_point_of_interest(
    city_id: ResourceId,
    poi_id: ResourceId,
    poi_update: PointOfInterestUpdate,
    repo: CityInfoRepository = Depends(get_city_info_repository),
) -> None:
    """Replace the editable fields of a point of interest."""
    _check_domain_rules(poi_update)
    poi = await _get_point_of_interest_or_404(repo, city_id, poi_id)

    apply_update(poi_update, poi)
    await _save_or_500(repo)


@router.patch("/{poi_id}", status_code=status.HTTP_204_NO_CONTENT)
async def partially_update_point_of_interest(
    city_id: ResourceId,
    poi_id: ResourceId,
    operations: list[PatchOperation] = Body(..., description="JSON Patch document"),
    repo: CityInfoRepository = Depends(get_city_info_repository),
) -> None:
    """Apply a JSON Patch document to a point of interest.

    Either every operation lands and the result is valid, or nothing changes.
    """
    poi = await _get_point_of_interest_or_404(repo, city_id, poi_id)

    try:
        patch_point_of_interest(poi, operations)
    except ValidationFailedError as e:
        logger.warning(f"Rejected patch of point of interest {poi_id} of city {city_id}: {e.errors}")
        raise

    await _save_or_500(repo)


@router.delete("/{poi_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_point_of_interest(
    city_id: ResourceId,
    poi_id: ResourceId,
    background_tasks: BackgroundTasks,
    repo: CityInfoRepository = Depends(get_city_info_repository),
    mail_service: MailService = Depends(get_mail_service),
) -> None:
    """Delete a point of interest and send a notification about it."""
    poi = await _get_point_of_interest_or_404(repo, city_id, poi_id)
    name, deleted_id = poi.name, poi.id

    await repo.delete_point_of_interest(poi)
    await _save_or_500(repo)

    background_tasks.add_task(
        send_quietly,
        mail_service,
        "Point of interest deleted.",
        f"Point of interest {name} with id {deleted_id} was deleted.",
    )
