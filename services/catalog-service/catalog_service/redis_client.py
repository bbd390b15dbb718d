from __future__ import annotations

import structlog
from redis.asyncio import Redis

from .config import get_settings

logger = structlog.get_logger(__name__)

redis_client: Redis | None = None

CATEGORIES_LIST_KEY = "catalog:categories:list"


async def init_redis() -> None:
    global redis_client

    settings = get_settings()
    if not settings.CATALOG_REDIS_ENABLED:
        logger.info("catalog_redis_disabled")
        return

    try:
        redis_client = Redis(
            host=settings.CATALOG_REDIS_HOST,
            port=settings.CATALOG_REDIS_PORT,
            db=settings.CATALOG_REDIS_DB,
            password=settings.CATALOG_REDIS_PASSWORD,
            encoding="utf-8",
            decode_responses=True,
            health_check_interval=30,
        )
        await redis_client.ping()
        logger.info(
            "catalog_redis_connected",
            host=settings.CATALOG_REDIS_HOST,
            port=settings.CATALOG_REDIS_PORT,
            db=settings.CATALOG_REDIS_DB,
        )
    except Exception:
        logger.error("catalog_redis_connect_failed", exc_info=True)
        redis_client = None


async def get_redis() -> Redis | None:
    return redis_client


async def close_redis() -> None:
    global redis_client

    if redis_client is None:
        return

    try:
        await redis_client.aclose()
        logger.info("catalog_redis_closed")
    except Exception:
        logger.warning("catalog_redis_close_failed", exc_info=True)
    finally:
        redis_client = None
