from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from catalog_service.filters import search_clause, visibility_clause
from catalog_service.models import Exercise, ExerciseCategory, ExerciseDescription, ExerciseVariant


def _user_variant_join(exercise, variant, user_id: str):
    return and_(variant.exercise_id == exercise.id, variant.user_id == user_id)


class CatalogRepository:
    @staticmethod
    def build_exercises_query(user_id: str, name: str | None = None):
        """Exercises visible to ``user_id`` outer-joined with category and the user's variants.

        The name search selects exercises whose own name or one of the
        user's variant names matches; every user variant of a selected
        exercise is still returned so the merge step sees all candidates.
        """
        query = (
            select(Exercise, ExerciseVariant, ExerciseCategory)
            .outerjoin(ExerciseCategory, ExerciseCategory.id == Exercise.category_id)
            .outerjoin(ExerciseVariant, _user_variant_join(Exercise, ExerciseVariant, user_id))
            .where(visibility_clause(user_id))
            .order_by(Exercise.name, Exercise.id)
        )

        search_exercise = aliased(Exercise)
        search_variant = aliased(ExerciseVariant)
        search = search_clause(name, search_exercise, search_variant)
        if search is not None:
            matching_ids = (
                select(search_exercise.id)
                .outerjoin(search_variant, _user_variant_join(search_exercise, search_variant, user_id))
                .where(search)
            )
            query = query.where(Exercise.id.in_(matching_ids))
        return query

    @staticmethod
    async def select_exercise_rows(db: AsyncSession, user_id: str, name: str | None = None):
        result = await db.execute(CatalogRepository.build_exercises_query(user_id, name))
        return result.all()

    @staticmethod
    async def get_exercise(db: AsyncSession, exercise_id: str):
        return await db.get(Exercise, exercise_id)

    @staticmethod
    async def insert_exercise(db: AsyncSession, values: dict):
        result = await db.execute(insert(Exercise).values(**values).returning(Exercise))
        return result.scalars().first()

    @staticmethod
    async def insert_variant(db: AsyncSession, values: dict):
        result = await db.execute(insert(ExerciseVariant).values(**values).returning(ExerciseVariant))
        return result.scalars().first()

    @staticmethod
    async def insert_description(db: AsyncSession, values: dict):
        result = await db.execute(insert(ExerciseDescription).values(**values).returning(ExerciseDescription))
        return result.scalars().first()

    @staticmethod
    async def update_variant(db: AsyncSession, variant_id: str, user_id: str, values: dict):
        owned = and_(ExerciseVariant.id == variant_id, ExerciseVariant.user_id == user_id)
        if not values:
            result = await db.execute(select(ExerciseVariant).where(owned))
            return result.scalars().first()

        result = await db.execute(
            update(ExerciseVariant)
            .where(owned)
            .values(**values)
            .returning(ExerciseVariant)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        return result.scalars().first()

    @staticmethod
    async def list_categories(db: AsyncSession):
        result = await db.execute(select(ExerciseCategory).order_by(ExerciseCategory.name))
        return result.scalars().all()

    @staticmethod
    async def list_descriptions(db: AsyncSession, user_id: str, exercise_id: str | None = None):
        query = select(ExerciseDescription).where(ExerciseDescription.user_id == user_id)
        if exercise_id is not None:
            query = query.where(ExerciseDescription.exercise_id == exercise_id)
        result = await db.execute(query.order_by(ExerciseDescription.created_at, ExerciseDescription.id))
        return result.scalars().all()
