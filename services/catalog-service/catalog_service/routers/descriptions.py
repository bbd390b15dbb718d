from fastapi import APIRouter, Depends, status

from catalog_service import schemas
from catalog_service.dependencies import get_catalog_service, get_current_user_id
from catalog_service.services.catalog_service import CatalogService

router = APIRouter(prefix="/exercises/descriptions", tags=["Descriptions"])


@router.get("", response_model=list[schemas.DescriptionResponse])
async def read_exercises_descriptions(
    exercise_id: str | None = None,
    user_id: str = Depends(get_current_user_id),
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.read_exercises_descriptions(user_id, exercise_id)


@router.post("", response_model=schemas.DescriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_exercise_description(
    payload: schemas.DescriptionCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.create_exercise_description(
        schemas.DescriptionCreate(**payload.model_dump(), user_id=user_id)
    )
