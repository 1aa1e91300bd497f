"""Typed configuration for the provider matching engine."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    synonyms_path: Path | None = Field(default=None, alias="PROVIDER_MATCHING_SYNONYMS")
    log_level: str = Field(default="INFO", alias="PROVIDER_MATCHING_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
