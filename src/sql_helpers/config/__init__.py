"""Configuration management for sql-helpers.

This module provides centralized configuration loaded from environment variables
with validation using Pydantic BaseSettings.

Usage:
    >>> from sql_helpers.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.capitalize_sql)
"""

from sql_helpers.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
