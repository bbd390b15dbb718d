from fastapi import APIRouter, Depends, Query, status

from catalog_service import schemas
from catalog_service.dependencies import get_catalog_service, get_current_user_id
from catalog_service.services.catalog_service import CatalogService

router = APIRouter(prefix="/exercises", tags=["Exercises"])


@router.get("", response_model=list[schemas.UnifiedExerciseResponse])
async def read_exercises(
    name: str | None = Query(None, description="Case-insensitive fragment of the exercise or variant name"),
    user_id: str = Depends(get_current_user_id),
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.read_exercises(user_id, name)


@router.post("", response_model=schemas.ExerciseResponse, status_code=status.HTTP_201_CREATED)
async def create_exercise(
    payload: schemas.ExerciseCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: CatalogService = Depends(get_catalog_service),
):
    dto = schemas.ExerciseCreate(
        **payload.model_dump(exclude={"shared"}),
        user_id=None if payload.shared else user_id,
    )
    return await service.create_exercise(dto)


@router.get("/categories", response_model=list[schemas.CategoryResponse])
async def read_exercises_categories(service: CatalogService = Depends(get_catalog_service)):
    return await service.read_exercises_categories()
