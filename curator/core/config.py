from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "curator"
    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    # In unit tests / CI we avoid long startup retries against external deps.
    ENSURE_EXTERNAL_DEPS_ON_STARTUP: bool = True
    STARTUP_DB_WAIT_ATTEMPTS: int = 30
    STARTUP_DB_WAIT_MAX_SLEEP_S: float = 2.0

    DATABASE_URL: str

    REDIS_URL: str = "redis://localhost:6379/0"
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"
    CELERY_TASK_ALWAYS_EAGER: bool = False

    # Max items picked up by one curation/index batch when no ids are given.
    CURATION_BATCH_LIMIT: int = 500

    # Comma-separated list of enabled search index plugins (e.g. "file_info").
    DISCOVERY_PLUGINS: str = "file_info"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
