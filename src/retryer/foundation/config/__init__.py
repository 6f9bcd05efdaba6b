"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    LoggingSettings,
    RetryerSettings,
    StrategySettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "RetryerSettings",
    "StrategySettings",
    "clear_settings_cache",
    "get_settings",
]
