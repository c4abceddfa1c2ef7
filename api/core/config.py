"""
Process configuration.

Settings are read once at startup (environment + optional `.env`) and passed
into the pool/client constructors. Request handlers never read the
environment themselves.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Relational store
    database_url: str = ""
    database_pool_min_size: int = 1
    database_pool_max_size: int = 5
    database_command_timeout: float = 30.0

    # Blob store
    storage_base_url: str = "https://storage.googleapis.com"
    storage_access_token: str | None = None
    storage_timeout: float = 60.0

    # Dev server
    host: str = "127.0.0.1"
    port: int = 8080

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("database_url", "storage_base_url", mode="before")
    @classmethod
    def _strip(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("storage_access_token", mode="before")
    @classmethod
    def _blank_token_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
