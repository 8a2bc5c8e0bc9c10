"""
hotel_california.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    All values come from `HC_*` environment variables; defaults are safe for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="HC_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and dev routes.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "hotel-california"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    token_ttl_hours: int = Field(default=24, ge=1)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./hotel_california.db"

    # Localization
    localization_dir: Path | None = None
    default_language: str = "tr"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `localization_dir=None` means "use the catalogs shipped inside the package".
