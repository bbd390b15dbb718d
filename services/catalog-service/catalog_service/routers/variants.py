from fastapi import APIRouter, Depends, status

from catalog_service import schemas
from catalog_service.dependencies import get_catalog_service, get_current_user_id
from catalog_service.services.catalog_service import CatalogService

router = APIRouter(prefix="/exercises/variants", tags=["Variants"])


@router.post("", response_model=schemas.VariantResponse, status_code=status.HTTP_201_CREATED)
async def create_variant(
    payload: schemas.VariantCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.create_variant(schemas.VariantCreate(**payload.model_dump(), user_id=user_id))


@router.put("/{variant_id}", response_model=schemas.VariantResponse)
async def update_variant(
    variant_id: str,
    payload: schemas.VariantUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: CatalogService = Depends(get_catalog_service),
):
    dto = schemas.VariantUpdate(
        **payload.model_dump(exclude_unset=True),
        variant_id=variant_id,
        user_id=user_id,
    )
    return await service.update_variant(dto)
