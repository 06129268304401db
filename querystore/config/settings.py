"""Environment configuration and validation.

Settings are loaded from environment variables (optionally via a local `.env` file).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from querystore.sql.resolver import DATETIME_FORMAT_TOKENS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    queries_dir: Path = Field(default=Path("queries"), alias="QUERIES_DIR")
    exclude_reserved_names: bool = Field(default=False, alias="EXCLUDE_RESERVED_NAMES")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept only the standard `logging` level names."""

        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {value!r}")
        return level

    @property
    def reserved_names(self) -> frozenset[str]:
        """Names excluded from parameter discovery under the current configuration."""

        return DATETIME_FORMAT_TOKENS if self.exclude_reserved_names else frozenset()


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
