"""lockdiff configuration loaded from environment variables."""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables with LOCKDIFF_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="LOCKDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Rendering
    color: bool = True
    verbose: bool = False
    pager: bool = False

    # Diffing
    strict_duplicates: bool = False

    # Logging
    debug: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'. Valid options: {', '.join(sorted(_LOG_LEVELS))}.")
        return level

    def effective_log_level(self) -> int:
        return logging.DEBUG if self.debug else logging.getLevelName(self.log_level)


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings: %s", settings.model_dump())

    return settings
