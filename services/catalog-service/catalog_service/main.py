from contextlib import asynccontextmanager

import structlog
from backend_common.database import create_tables
from backend_common.fastapi_app import create_service_app

from catalog_service.config import get_settings
from catalog_service.database import Base, engine
from catalog_service.exceptions import CatalogError, catalog_error_handler
from catalog_service.logging_config import configure_logging
from catalog_service.redis_client import close_redis, init_redis
from catalog_service.routers import core_router, descriptions, exercises, variants

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app):
    if get_settings().CATALOG_CREATE_TABLES_ON_STARTUP:
        await create_tables(engine, Base.metadata)
    await init_redis()
    logger.info("catalog_service_started")
    yield
    await close_redis()


app = create_service_app(
    title="catalog-service",
    version="0.1.0",
    description="Global exercise catalog with per-user variants and descriptions",
    enable_cors=False,
    exception_handlers={CatalogError: catalog_error_handler},
    lifespan=lifespan,
)

app.include_router(core_router.router, prefix="/catalog")
app.include_router(exercises.router, prefix="/catalog")
app.include_router(variants.router, prefix="/catalog")
app.include_router(descriptions.router, prefix="/catalog")
