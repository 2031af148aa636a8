from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MENTORHUB_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Backend selection: sql (local database), rest (hosted PostgREST), null (unconfigured)
    backend: Literal["sql", "rest", "null"] = "sql"

    # Database
    db_url: str = "sqlite+aiosqlite:///./mentorhub.db"

    # Hosted backend (Supabase / PostgREST)
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_schema: str = "public"
    http_timeout_seconds: float = 10.0

    # Scheduling
    display_timezone: str = "Asia/Kolkata"
    upcoming_sessions_limit: int = 10
    reject_zero_length_slots: bool = False


def get_settings() -> Settings:
    return Settings()
