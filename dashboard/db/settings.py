from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Personal Dashboard API"
    app_host: str = "0.0.0.0"
    app_port: int = 5000
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/dashboard"
    seed_demo: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    default_user_id: str = "default-user"
    fanout_months: int = 13
    bucket_write_attempts: int = 3
    upcoming_window_days: int = 7


@lru_cache
def get_settings() -> Settings:
    return Settings()
