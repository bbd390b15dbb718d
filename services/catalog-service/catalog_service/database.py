from urllib.parse import urlparse

import structlog
from backend_common.database import create_async_engine_and_session, ensure_asyncpg_url, sanitize_asyncpg_url
from sqlalchemy.orm import declarative_base

from .config import get_settings

logger = structlog.get_logger(__name__)

Base = declarative_base()


def resolve_database_url(raw_url: str) -> str:
    return sanitize_asyncpg_url(ensure_asyncpg_url(raw_url))


_settings = get_settings()
CATALOG_DATABASE_URL = resolve_database_url(_settings.CATALOG_DATABASE_URL)

logger.info("catalog_database_url_scheme", scheme=urlparse(CATALOG_DATABASE_URL).scheme)

engine, AsyncSessionLocal = create_async_engine_and_session(
    CATALOG_DATABASE_URL,
    echo=_settings.CATALOG_DATABASE_ECHO,
    expire_on_commit=False,
)
