"""
Configuration settings for easydb.

Uses Pydantic Settings to load environment variables for the master/slave
connection strings, pool sizing, and logging.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_driver: str = Field("postgres", alias="DB_DRIVER")
    db_master_dsn: Optional[str] = Field(None, alias="DB_MASTER_DSN")
    db_slave_dsn: Optional[str] = Field(None, alias="DB_SLAVE_DSN")

    # Pool
    db_pool_min_size: int = Field(1, alias="DB_POOL_MIN_SIZE", ge=0)
    db_pool_max_size: int = Field(10, alias="DB_POOL_MAX_SIZE", ge=1)
    db_connect_timeout: float = Field(30.0, alias="DB_CONNECT_TIMEOUT", gt=0)

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
