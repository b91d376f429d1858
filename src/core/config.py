"""Lightweight configuration for the engine."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings. Values can be overridden with REVERSI_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REVERSI_", env_file=".env", env_file_encoding="utf-8"
    )

    log_level: str = Field(default="INFO", description="Root log level")
    log_board: bool = Field(
        default=True,
        description="Dump the board at DEBUG level after every accepted move",
    )
    sql_echo: bool = Field(
        default=False, description="Echo the SQL emitted by the match store"
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
