"""Reporting configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportingSettings(BaseSettings):
    """Settings loaded from REPORTING_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPORTING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    env: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"

    # Raise the first malformed envelope instead of skipping it
    fail_fast: bool = False

    @property
    def is_production(self) -> bool:
        return self.env == "production"


@lru_cache
def get_settings() -> ReportingSettings:
    return ReportingSettings()
