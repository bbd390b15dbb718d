import functools

import structlog
from backend_common.cache import CacheHelper, CacheMetrics
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..config import get_settings
from ..exceptions import CatalogError, ExerciseNotFound, NotFound, StoreFault, VariantNotFound
from ..filters import is_visible
from ..metrics import (
    CATALOG_CACHE_ERRORS_TOTAL,
    CATALOG_CACHE_HITS_TOTAL,
    CATALOG_CACHE_MISSES_TOTAL,
    CATALOG_DESCRIPTIONS_CREATED_TOTAL,
    CATALOG_EXERCISES_CREATED_TOTAL,
    CATALOG_STORE_FAULTS_TOTAL,
    CATALOG_VARIANTS_CREATED_TOTAL,
    CATALOG_VARIANTS_UPDATED_TOTAL,
)
from ..normalizer import normalize
from ..redis_client import CATEGORIES_LIST_KEY, get_redis
from ..repositories.catalog_repository import CatalogRepository
from .merge import merge_exercise_rows

logger = structlog.get_logger(__name__)


def catalog_boundary(operation: str, *, write: bool = False):
    """Public-operation boundary.

    Catalog errors pass through unchanged, anything else becomes a
    StoreFault chained to its cause. Writes are rolled back first.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except CatalogError:
                if write:
                    await self.db.rollback()
                raise
            except Exception as exc:
                if write:
                    await self.db.rollback()
                CATALOG_STORE_FAULTS_TOTAL.labels(operation=operation).inc()
                logger.error("catalog_store_fault", operation=operation, exc_info=True)
                raise StoreFault() from exc

        return wrapper

    return decorator


class CatalogService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = CatalogRepository()
        self.settings = get_settings()
        self._cache = CacheHelper(
            get_redis=get_redis,
            metrics=CacheMetrics(
                hits=CATALOG_CACHE_HITS_TOTAL,
                misses=CATALOG_CACHE_MISSES_TOTAL,
                errors=CATALOG_CACHE_ERRORS_TOTAL,
            ),
            default_ttl=self.settings.CATALOG_CATEGORIES_TTL_SECONDS,
        )

    async def _require_visible_exercise(self, exercise_id: str, user_id: str):
        exercise = await self.repository.get_exercise(self.db, exercise_id)
        if exercise is None or not is_visible(exercise, user_id):
            raise ExerciseNotFound(exercise_id)
        return exercise

    @catalog_boundary("create_exercise", write=True)
    async def create_exercise(self, dto: schemas.ExerciseCreate) -> schemas.ExerciseResponse:
        created = await self.repository.insert_exercise(self.db, dto.model_dump())
        if created is None:
            raise NotFound("Error creating the exercise")
        response = normalize(created, schemas.ExerciseResponse)
        await self.db.commit()

        scope = "private" if response.user_id else "global"
        CATALOG_EXERCISES_CREATED_TOTAL.labels(scope=scope).inc()
        logger.info("exercise_created", exercise_id=response.id, scope=scope)
        return response

    @catalog_boundary("create_variant", write=True)
    async def create_variant(self, dto: schemas.VariantCreate) -> schemas.VariantResponse:
        await self._require_visible_exercise(dto.exercise_id, dto.user_id)

        created = await self.repository.insert_variant(self.db, dto.model_dump())
        if created is None:
            raise NotFound("Error creating the variant")
        response = normalize(created, schemas.VariantResponse)
        await self.db.commit()

        CATALOG_VARIANTS_CREATED_TOTAL.inc()
        logger.info("variant_created", variant_id=response.id, exercise_id=response.exercise_id)
        return response

    @catalog_boundary("create_exercise_description", write=True)
    async def create_exercise_description(self, dto: schemas.DescriptionCreate) -> schemas.DescriptionResponse:
        if dto.exercise_id is not None:
            await self._require_visible_exercise(dto.exercise_id, dto.user_id)

        created = await self.repository.insert_description(self.db, dto.model_dump())
        if created is None:
            raise NotFound("Error creating the exercise description")
        response = normalize(created, schemas.DescriptionResponse)
        await self.db.commit()

        CATALOG_DESCRIPTIONS_CREATED_TOTAL.inc()
        logger.info("exercise_description_created", description_id=response.id, exercise_id=response.exercise_id)
        return response

    @catalog_boundary("update_variant", write=True)
    async def update_variant(self, dto: schemas.VariantUpdate) -> schemas.VariantResponse:
        updated = await self.repository.update_variant(self.db, dto.variant_id, dto.user_id, dto.changes())
        if updated is None:
            raise VariantNotFound(dto.variant_id)
        response = normalize(updated, schemas.VariantResponse)
        await self.db.commit()

        CATALOG_VARIANTS_UPDATED_TOTAL.inc()
        logger.info("variant_updated", variant_id=response.id)
        return response

    @catalog_boundary("read_exercises")
    async def read_exercises(self, user_id: str, name: str | None = None) -> list[schemas.UnifiedExerciseResponse]:
        rows = await self.repository.select_exercise_rows(self.db, user_id, name)
        return merge_exercise_rows(rows, user_id, name)

    @catalog_boundary("read_exercises_categories")
    async def read_exercises_categories(self) -> list[schemas.CategoryResponse]:
        cached = await self._cache.get(CATEGORIES_LIST_KEY)
        if cached is not None:
            return [schemas.CategoryResponse.model_validate(item) for item in cached]

        categories = await self.repository.list_categories(self.db)
        responses = [normalize(category, schemas.CategoryResponse) for category in categories]
        await self._cache.set(CATEGORIES_LIST_KEY, [item.model_dump(mode="json") for item in responses])
        return responses

    @catalog_boundary("read_exercises_descriptions")
    async def read_exercises_descriptions(
        self, user_id: str, exercise_id: str | None = None
    ) -> list[schemas.DescriptionResponse]:
        descriptions = await self.repository.list_descriptions(self.db, user_id, exercise_id)
        return [normalize(description, schemas.DescriptionResponse) for description in descriptions]

    async def invalidate_categories_cache(self) -> None:
        await self._cache.delete(CATEGORIES_LIST_KEY)
