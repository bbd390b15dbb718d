import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

# Ensure the service package and the shared lib are importable without installation
SERVICE_ROOT = Path(__file__).resolve().parents[1]
COMMON_ROOT = SERVICE_ROOT.parents[1] / "libs" / "backend-common"
for path in (SERVICE_ROOT, COMMON_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

os.environ.setdefault("CATALOG_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CATALOG_REDIS_ENABLED", "false")
os.environ.setdefault("CATALOG_CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("APP_ENV", "test")

from backend_common.database import create_async_engine_and_session, create_tables  # noqa: E402

from catalog_service.database import Base  # noqa: E402
from catalog_service.models import Exercise, ExerciseCategory  # noqa: E402
from catalog_service.services.catalog_service import CatalogService  # noqa: E402

ALICE = "user-alice"
BOB = "user-bob"


@pytest.fixture()
async def store():
    engine, session_factory = create_async_engine_and_session(
        "sqlite+aiosqlite://",
        expire_on_commit=False,
        poolclass=StaticPool,
    )
    await create_tables(engine, Base.metadata)
    yield engine, session_factory
    await engine.dispose()


@pytest.fixture()
def engine(store):
    return store[0]


@pytest.fixture()
def session_factory(store):
    return store[1]


@pytest.fixture()
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
def service(db) -> CatalogService:
    return CatalogService(db)


@pytest.fixture()
async def catalog(session_factory) -> dict[str, str]:
    """Two global exercises, one private exercise per user, one category."""
    async with session_factory() as session:
        legs = ExerciseCategory(name="Legs")
        session.add(legs)
        await session.flush()

        rows = {
            "squat": Exercise(name="Back Squat", category_id=legs.id),
            "bench": Exercise(name="Bench Press"),
            "alice_private": Exercise(name="Sled Push", user_id=ALICE, category_id=legs.id),
            "bob_private": Exercise(name="Secret Lift", user_id=BOB),
        }
        session.add_all(rows.values())
        await session.commit()

        ids = {key: exercise.id for key, exercise in rows.items()}
        ids["legs"] = legs.id
        return ids


@pytest.fixture()
async def client(session_factory):
    from catalog_service.dependencies import get_db
    from catalog_service.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.pop(get_db, None)
