from typing import Any
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import structlog
from sqlalchemy import MetaData, event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

logger = structlog.get_logger(__name__)


def ensure_asyncpg_url(url: str) -> str:
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


def sanitize_asyncpg_url(url: str) -> str:
    """Translate libpq-only query parameters into ones asyncpg understands.

    asyncpg rejects ``sslmode`` and ``channel_binding``; ``sslmode`` is mapped
    onto asyncpg's ``ssl`` flag and ``channel_binding`` is dropped.
    """
    parsed = urlparse(url)
    if not parsed.scheme.startswith("postgresql+asyncpg"):
        return url

    q = dict(parse_qsl(parsed.query, keep_blank_values=True))
    sslmode = (q.get("sslmode") or "").strip().lower()
    removed_sslmode = q.pop("sslmode", None)

    if sslmode in {"require", "verify-full", "verify-ca"}:
        q.setdefault("ssl", "true")
    elif sslmode in {"disable"}:
        q.setdefault("ssl", "false")

    removed_channel_binding = q.pop("channel_binding", None)

    if removed_sslmode or removed_channel_binding:
        logger.info(
            "database_url_sanitized",
            removed_sslmode=removed_sslmode,
            removed_channel_binding=removed_channel_binding,
        )
    return urlunparse(parsed._replace(query=urlencode(q, doseq=True)))


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(engine: AsyncEngine) -> None:
    """Replace SQLite's ASCII-only ``lower`` with Python's Unicode-aware one.

    Case-insensitive comparisons (``ilike``, ``icontains``) compile to
    ``lower(...)`` on SQLite, so non-ASCII names would otherwise only match
    with identical case.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower)


def create_async_engine_and_session(
    database_url: str,
    *,
    echo: bool = False,
    expire_on_commit: bool = True,
    autoflush: bool = True,
    **engine_kwargs: Any,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(database_url, echo=echo, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        register_sqlite_functions(engine)
    session_factory = async_sessionmaker(
        bind=engine,
        expire_on_commit=expire_on_commit,
        autoflush=autoflush,
        class_=AsyncSession,
    )
    return engine, session_factory


async def create_tables(engine: AsyncEngine, metadata: MetaData) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
