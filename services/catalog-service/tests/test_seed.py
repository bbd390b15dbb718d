from sqlalchemy import func, select

from catalog_service.models import Exercise, ExerciseCategory
from catalog_service.scripts.seed_catalog import DEFAULT_CATEGORIES, DEFAULT_EXERCISES, seed


async def test_seed_is_idempotent(engine, session_factory):
    first = await seed(bind=engine, session_factory=session_factory)
    assert first["categories_created"] == len(DEFAULT_CATEGORIES)
    assert first["exercises_created"] == len(DEFAULT_EXERCISES)

    second = await seed(bind=engine, session_factory=session_factory)
    assert second["categories_created"] == 0
    assert second["exercises_created"] == 0
    assert second["exercises_skipped"] == len(DEFAULT_EXERCISES)

    async with session_factory() as db:
        total = await db.scalar(select(func.count()).select_from(Exercise))
        owned = await db.scalar(select(func.count()).select_from(Exercise).where(Exercise.user_id.is_not(None)))
        assert total == len(DEFAULT_EXERCISES)
        assert owned == 0


async def test_seed_upsert_updates_category(engine, session_factory):
    await seed(
        categories=[{"name": "Legs"}, {"name": "Strength"}],
        exercises=[{"name": "Back Squat", "category": "Legs"}],
        bind=engine,
        session_factory=session_factory,
    )

    counts = await seed(
        categories=[{"name": "Strength", "description": "Heavy compound lifts"}],
        exercises=[{"name": "Back Squat", "category": "Strength"}],
        bind=engine,
        session_factory=session_factory,
    )
    assert counts["categories_updated"] == 1
    assert counts["exercises_updated"] == 1

    async with session_factory() as db:
        squat = (await db.execute(select(Exercise).where(Exercise.name == "Back Squat"))).scalar_one()
        strength = (await db.execute(select(ExerciseCategory).where(ExerciseCategory.name == "Strength"))).scalar_one()
        assert squat.category_id == strength.id
        assert strength.description == "Heavy compound lifts"


async def test_seed_without_upsert_leaves_rows(engine, session_factory):
    await seed(
        categories=[{"name": "Legs"}, {"name": "Strength"}],
        exercises=[{"name": "Back Squat", "category": "Legs"}],
        bind=engine,
        session_factory=session_factory,
    )
    counts = await seed(
        categories=[{"name": "Strength"}],
        exercises=[{"name": "Back Squat", "category": "Strength"}],
        upsert=False,
        bind=engine,
        session_factory=session_factory,
    )
    assert counts["exercises_updated"] == 0
    assert counts["exercises_skipped"] == 1
