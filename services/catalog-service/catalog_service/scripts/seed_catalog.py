import argparse
import asyncio

import structlog
from backend_common.database import create_tables
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ..database import AsyncSessionLocal, Base, engine
from ..models import Exercise, ExerciseCategory
from ..services.catalog_service import CatalogService

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES: list[dict[str, str | None]] = [
    {"name": "Legs", "description": "Squats, lunges, hinges and leg machines"},
    {"name": "Chest", "description": "Horizontal and incline pressing"},
    {"name": "Back", "description": "Rows, pulldowns and pull-ups"},
    {"name": "Shoulders", "description": "Overhead pressing and raises"},
    {"name": "Arms", "description": "Biceps and triceps isolation"},
    {"name": "Core", "description": "Trunk stability and flexion"},
]

DEFAULT_EXERCISES: list[dict[str, str | None]] = [
    {"name": "Back Squat", "category": "Legs"},
    {"name": "Front Squat", "category": "Legs"},
    {"name": "Romanian Deadlift", "category": "Legs"},
    {"name": "Walking Lunge", "category": "Legs"},
    {"name": "Bench Press", "category": "Chest"},
    {"name": "Incline Dumbbell Press", "category": "Chest"},
    {"name": "Deadlift", "category": "Back"},
    {"name": "Barbell Row", "category": "Back"},
    {"name": "Pull-Up", "category": "Back"},
    {"name": "Overhead Press", "category": "Shoulders"},
    {"name": "Lateral Raise", "category": "Shoulders"},
    {"name": "Dumbbell Curl", "category": "Arms"},
    {"name": "Triceps Pushdown", "category": "Arms"},
    {"name": "Plank", "category": "Core"},
    {"name": "Hanging Leg Raise", "category": "Core"},
]


async def _seed_categories(db: AsyncSession, categories, upsert: bool, counts: dict[str, int]) -> dict[str, str]:
    existing = {c.name: c for c in (await db.execute(select(ExerciseCategory))).scalars().all()}
    for item in categories:
        name = item.get("name")
        if not name:
            continue
        category = existing.get(name)
        if category is None:
            category = ExerciseCategory(name=name, description=item.get("description"))
            db.add(category)
            existing[name] = category
            counts["categories_created"] += 1
        elif upsert and item.get("description") is not None and category.description != item["description"]:
            category.description = item["description"]
            counts["categories_updated"] += 1
    await db.flush()
    return {name: category.id for name, category in existing.items()}


async def _seed_exercises(
    db: AsyncSession, exercises, category_ids: dict[str, str], upsert: bool, counts: dict[str, int]
) -> None:
    # only the shared catalog is touched, private exercises with the same name are left alone
    result = await db.execute(select(Exercise).where(Exercise.user_id.is_(None)))
    existing = {e.name: e for e in result.scalars().all()}
    for item in exercises:
        name = item.get("name")
        if not name:
            continue
        category_id = category_ids.get(item.get("category") or "")
        exercise = existing.get(name)
        if exercise is None:
            db.add(
                Exercise(
                    name=name,
                    video=item.get("video"),
                    image=item.get("image"),
                    category_id=category_id,
                )
            )
            counts["exercises_created"] += 1
        elif upsert and category_id is not None and exercise.category_id != category_id:
            exercise.category_id = category_id
            counts["exercises_updated"] += 1
        else:
            counts["exercises_skipped"] += 1


async def seed(
    categories: list[dict[str, str | None]] = DEFAULT_CATEGORIES,
    exercises: list[dict[str, str | None]] = DEFAULT_EXERCISES,
    upsert: bool = True,
    *,
    bind: AsyncEngine = engine,
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
) -> dict[str, int]:
    """Populate the shared catalog, matching existing rows by name.

    - upsert=True: refresh category descriptions and exercise categories
    - upsert=False: insert only what is missing
    """
    await create_tables(bind, Base.metadata)

    counts = {
        "categories_created": 0,
        "categories_updated": 0,
        "exercises_created": 0,
        "exercises_updated": 0,
        "exercises_skipped": 0,
    }
    async with session_factory() as db:
        try:
            category_ids = await _seed_categories(db, categories, upsert, counts)
            await _seed_exercises(db, exercises, category_ids, upsert, counts)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        await CatalogService(db).invalidate_categories_cache()

    logger.info("catalog_seed_finished", **counts)
    return counts


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the shared exercise catalog")
    parser.add_argument(
        "--no-upsert",
        action="store_true",
        help="Do not update existing records, only insert missing ones",
    )
    args = parser.parse_args()

    asyncio.run(seed(upsert=not args.no_upsert))


if __name__ == "__main__":
    main()
