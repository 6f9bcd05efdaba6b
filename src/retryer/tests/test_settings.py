"""Tests for environment-based configuration."""

import pytest

from retryer.foundation.config import (
    LoggingSettings,
    RetryerSettings,
    StrategySettings,
    get_settings,
)
from retryer.foundation.errors import RetryExhaustedError
from retryer.runtime.retry import (
    FixedWait,
    IncrementingWait,
    NeverStop,
    RandomWait,
    RetryerBuilder,
    StopAfterAttempt,
    StopAfterDelay,
)


class TestDefaults:
    def test_defaults(self) -> None:
        settings = RetryerSettings()
        assert settings.debug is False
        assert settings.logging.level == "INFO"
        assert settings.logging.format == "console"
        assert settings.strategy.stop_strategy() is None
        assert settings.strategy.wait_strategy() is None
    
    def test_cached(self) -> None:
        assert get_settings() is get_settings()


class TestEnvironment:
    def test_logging_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RETRYER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("RETRYER_LOG_FORMAT", "json")
        settings = get_settings()
        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "json"
    
    def test_stop_after_attempt_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RETRYER_STRATEGY_STOP_AFTER_ATTEMPT", "3")
        assert StrategySettings().stop_strategy() == StopAfterAttempt(3)
    
    def test_stop_after_delay_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RETRYER_STRATEGY_STOP_AFTER_DELAY_MS", "1500")
        assert StrategySettings().stop_strategy() == StopAfterDelay(1500)
    
    @pytest.mark.parametrize(("env", "expected"), [
        ({"WAIT": "fixed", "WAIT_MS": "200"}, FixedWait(200)),
        ({"WAIT": "random", "WAIT_MS": "10", "WAIT_MAX_MS": "20"}, RandomWait(10, 20)),
        ({"WAIT": "incrementing", "WAIT_MS": "100", "WAIT_INCREMENT_MS": "50"}, IncrementingWait(100, 50)),
    ])
    def test_wait_from_env(self, monkeypatch: pytest.MonkeyPatch, env: dict[str, str], expected: object) -> None:
        for key, value in env.items():
            monkeypatch.setenv(f"RETRYER_STRATEGY_{key}", value)
        assert StrategySettings().wait_strategy() == expected


class TestValidation:
    def test_both_stop_options_rejected(self) -> None:
        with pytest.raises(ValueError, match="not both"):
            StrategySettings(stop_after_attempt=3, stop_after_delay_ms=100)
    
    def test_random_wait_needs_maximum(self) -> None:
        with pytest.raises(ValueError, match="wait_max_ms"):
            StrategySettings(wait="random", wait_ms=10)
    
    def test_unknown_wait_rejected(self) -> None:
        with pytest.raises(ValueError):
            StrategySettings(wait="exponential")
    
    def test_non_positive_attempts_rejected(self) -> None:
        with pytest.raises(ValueError):
            StrategySettings(stop_after_attempt=0)
    
    def test_unknown_log_format_rejected(self) -> None:
        with pytest.raises(ValueError):
            LoggingSettings(format="xml")


class TestBuilderFromSettings:
    def test_configured_strategies(self) -> None:
        settings = RetryerSettings(strategy=StrategySettings(stop_after_attempt=4, wait="fixed", wait_ms=25))
        retryer = RetryerBuilder.from_settings(settings).build()
        assert retryer.stop_strategy == StopAfterAttempt(4)
        assert retryer.wait_strategy == FixedWait(25)
    
    def test_unconfigured_keeps_defaults(self) -> None:
        builder = RetryerBuilder.from_settings(RetryerSettings())
        retryer = builder.with_wait_strategy(FixedWait(5)).build()
        assert isinstance(retryer.stop_strategy, NeverStop)
        assert retryer.wait_strategy == FixedWait(5)
    
    def test_uses_global_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RETRYER_STRATEGY_STOP_AFTER_ATTEMPT", "2")
        retryer = RetryerBuilder.from_settings().retry_if_result(lambda r: r is None).build()
        
        calls: list[int] = []
        with pytest.raises(RetryExhaustedError):
            retryer.call(lambda: calls.append(1))
        assert len(calls) == 2


class TestDotEnv:
    """Variables of every settings group are read from .env in the working directory."""
    
    def test_nested_groups_read_dotenv(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text(
            "RETRYER_STRATEGY_STOP_AFTER_ATTEMPT=4\n"
            "RETRYER_STRATEGY_WAIT=fixed\n"
            "RETRYER_STRATEGY_WAIT_MS=75\n"
            "RETRYER_LOG_FORMAT=json\n"
            "RETRYER_DEBUG=true\n",
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)
        
        settings = RetryerSettings()
        assert settings.debug is True
        assert settings.logging.format == "json"
        assert settings.strategy.stop_strategy() == StopAfterAttempt(4)
        assert settings.strategy.wait_strategy() == FixedWait(75)
    
    def test_environment_overrides_dotenv(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("RETRYER_STRATEGY_STOP_AFTER_ATTEMPT=4\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("RETRYER_STRATEGY_STOP_AFTER_ATTEMPT", "9")
        
        assert StrategySettings().stop_after_attempt == 9
