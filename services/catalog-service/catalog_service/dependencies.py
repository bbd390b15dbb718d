from backend_common.dependencies import make_get_current_user_id, make_get_db_async
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.database import AsyncSessionLocal
from catalog_service.services.catalog_service import CatalogService

get_db = make_get_db_async(AsyncSessionLocal)

get_current_user_id = make_get_current_user_id("catalog-service")


def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(db)
