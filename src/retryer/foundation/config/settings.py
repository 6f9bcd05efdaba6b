"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from retryer.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'
    
    # Or with environment variables:
    # RETRYER_LOG_LEVEL=DEBUG
    # RETRYER_STRATEGY_STOP_AFTER_ATTEMPT=5
    # RETRYER_STRATEGY_WAIT=fixed
    # RETRYER_STRATEGY_WAIT_MS=200
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Literal, Self

from pydantic import Field, NonNegativeInt, PositiveInt, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from retryer.runtime.retry import StopStrategy, WaitStrategy


class LoggingSettings(BaseSettings):
    """Logging configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="RETRYER_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    
    def apply(self, level: str | None = None) -> None:
        """Install this configuration as the global logging setup. `level` overrides the configured one."""
        from retryer.runtime.observability import configure_logging
        configure_logging(format=self.format, level=level or self.level)


class StrategySettings(BaseSettings):
    """Default stop and wait strategies for builders created from settings."""
    
    model_config = SettingsConfigDict(
        env_prefix="RETRYER_STRATEGY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    stop_after_attempt: PositiveInt | None = Field(default=None, description="Give up after N attempts")
    stop_after_delay_ms: NonNegativeInt | None = Field(default=None, description="Give up after this many ms")
    wait: Literal["none", "fixed", "random", "incrementing"] = "none"
    wait_ms: NonNegativeInt = Field(default=0, description="Fixed/initial/minimum wait in ms")
    wait_max_ms: PositiveInt | None = Field(default=None, description="Upper bound for random waits")
    wait_increment_ms: int = Field(default=0, description="Increment per attempt for incrementing waits")
    
    @model_validator(mode="after")
    def _check_consistency(self) -> Self:
        if self.stop_after_attempt is not None and self.stop_after_delay_ms is not None:
            raise ValueError("configure either stop_after_attempt or stop_after_delay_ms, not both")
        if self.wait == "random" and self.wait_max_ms is None:
            raise ValueError("wait_max_ms is required for random waits")
        return self
    
    def stop_strategy(self) -> StopStrategy | None:
        """Configured stop strategy, or None when unset."""
        from retryer.runtime.retry import stop_after_attempt, stop_after_delay
        if self.stop_after_attempt is not None:
            return stop_after_attempt(self.stop_after_attempt)
        if self.stop_after_delay_ms is not None:
            return stop_after_delay(self.stop_after_delay_ms)
        return None
    
    def wait_strategy(self) -> WaitStrategy | None:
        """Configured wait strategy, or None for "none"."""
        from retryer.runtime.retry import fixed_wait, incrementing_wait, random_wait
        match self.wait:
            case "fixed": return fixed_wait(self.wait_ms)
            case "random": return random_wait(self.wait_ms, self.wait_max_ms)
            case "incrementing": return incrementing_wait(self.wait_ms, self.wait_increment_ms)
            case _: return None


class RetryerSettings(BaseSettings):
    """Root settings.
    
    Loads configuration from environment variables with RETRYER_ prefix.
    Supports nested configuration and .env files.
    
    Example environment variables:
        RETRYER_DEBUG=true
        RETRYER_LOG_FORMAT=json
        RETRYER_STRATEGY_STOP_AFTER_DELAY_MS=30000
    """
    
    model_config = SettingsConfigDict(
        env_prefix="RETRYER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )
    
    debug: bool = Field(default=False, description="Log at DEBUG regardless of RETRYER_LOG_LEVEL")
    
    # Nested settings (loaded with RETRYER_LOG_, RETRYER_STRATEGY_)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    strategy: StrategySettings = Field(default_factory=StrategySettings)
    
    def apply_logging(self) -> None:
        """Install the logging configuration, forcing DEBUG level in debug mode."""
        self.logging.apply(level="DEBUG" if self.debug else None)


@lru_cache(maxsize=1)
def get_settings() -> RetryerSettings:
    """Get the global settings instance (cached)."""
    return RetryerSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).
    
    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
