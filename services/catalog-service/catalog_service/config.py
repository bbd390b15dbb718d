from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    CATALOG_DATABASE_URL: str = "sqlite+aiosqlite:///./catalog.db"
    CATALOG_DATABASE_ECHO: bool = False

    CATALOG_REDIS_ENABLED: bool = True
    CATALOG_REDIS_HOST: str = "redis"
    CATALOG_REDIS_PORT: int = 6379
    CATALOG_REDIS_DB: int = 0
    CATALOG_REDIS_PASSWORD: str | None = None
    CATALOG_CATEGORIES_TTL_SECONDS: int = 60 * 60

    CATALOG_CREATE_TABLES_ON_STARTUP: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
