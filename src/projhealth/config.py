"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from projhealth.domain.tables import CURRENT_TABLES_VERSION

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    backend_base_url: str = "http://localhost:3000"
    backend_timeout_seconds: float = 30
    plan_cache_ttl_seconds: int = 600
    plan_cache_max_entries: int = 256
    metrics_tables_version: str = CURRENT_TABLES_VERSION
    meal_tables_version: str = CURRENT_TABLES_VERSION
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
