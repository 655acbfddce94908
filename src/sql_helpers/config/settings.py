"""
Configuration management for sql-helpers.

Environment-based configuration using Pydantic BaseSettings. Variables use the
SQL_HELPERS_ prefix, e.g. SQL_HELPERS_CAPITALIZE_SQL=true, and may also be
placed in a .env file at the project root (or the file named by
SQL_HELPERS_ENV_FILE).
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SQL_HELPERS_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Fields:
    - capitalize_sql: Default keyword case for generated statements
    - log_level: Logging level name
    - json_logs: Render logs as JSON (True) or for the console (False)
    """

    capitalize_sql: bool = Field(
        default=False,
        description="Upper-case SQL keywords in generated statements by default",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(
        default=True, description="Render structured logs as JSON lines"
    )

    model_config = SettingsConfigDict(
        env_prefix="SQL_HELPERS_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got '{value}'"
            )
        return level


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Settings are read once per process; call ``get_settings.cache_clear()``
    after changing the environment.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
