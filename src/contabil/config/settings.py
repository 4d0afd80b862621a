"""Environment-based settings for contabil."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional, get_args

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "CONTABIL_"
DB_PATH_ENV = f"{ENV_PREFIX}DB_PATH"
LOG_LEVEL_ENV = f"{ENV_PREFIX}LOG_LEVEL"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["console", "json"]

LOG_LEVELS = get_args(LogLevel)


class Settings(BaseSettings):
    """Process-wide settings read from CONTABIL_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_path: Optional[str] = Field(default=None, description="SQLite database file")
    log_level: LogLevel = Field(default="WARNING", description="Logging level")
    log_format: LogFormat = Field(default="console", description="Log output format")

    @field_validator("db_path", mode="before")
    @classmethod
    def empty_path_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def lower_format(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def default_database_path() -> str:
    """Return ~/.contabil/contabil.db, creating the directory if needed."""
    db_dir = Path.home() / ".contabil"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "contabil.db")
