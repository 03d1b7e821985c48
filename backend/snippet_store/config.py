"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_env: str = "development"
    app_debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api"

    # Snippets
    # Root directory holding the .sql files. Empty means "not configured".
    snippets_management_folder: str = ""

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    @field_validator("snippets_management_folder", mode="after")
    @classmethod
    def strip_folder(cls, v: str) -> str:
        """Treat a whitespace-only folder as unset."""
        return v.strip()

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the log level is one the logging module understands."""
        level = v.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return level

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def snippets_configured(self) -> bool:
        return bool(self.snippets_management_folder)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
