from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "creator-toolkit"
    app_env: str = "dev"
    app_version: str = "0.1.0"
    commit_sha: str = "dev"

    log_level: str = "INFO"

    # empty string disables the store (anonymous-only mode)
    database_url: str | None = "sqlite+aiosqlite:///./creator_toolkit.db"
    # unset disables sessions and idempotency keys
    redis_url: str | None = None

    free_daily_limit: int = 3

    session_ttl_seconds: int = 30 * 24 * 3600
    idempotency_ttl_seconds: int = 24 * 3600

    notify_webhook_url: str | None = None
    notify_timeout_seconds: float = 5.0

    history_default_limit: int = 10
    history_max_limit: int = 50

    uvicorn_access_log: bool = False

    @field_validator("database_url", "redis_url", "notify_webhook_url", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


settings = Settings()
