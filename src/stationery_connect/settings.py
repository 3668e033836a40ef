"""
stationery_connect.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `SC_`), defaults safe for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="SC_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and dev tokens.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "stationery-connect"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "stationery-connect"
    jwt_audience: str = "stationery-connect-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./stationery_connect.db"

    # Reports
    report_top_n: int = Field(default=5, ge=1, le=100)
    recent_activity_limit: int = Field(default=10, ge=1, le=200)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(...)` directly and pass it to `create_app`; the
# cached instance is only used by the process entrypoint and dependencies.
