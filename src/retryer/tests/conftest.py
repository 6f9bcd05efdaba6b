"""Shared fixtures."""

import pytest

from retryer.foundation.config import clear_settings_cache
from retryer.runtime.concurrency import current_token
from retryer.runtime.observability import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging() -> object:
    """Silence engine logging unless a test installs its own renderer."""
    configure_logging(format="none")
    yield
    configure_logging(format="none")


@pytest.fixture(autouse=True)
def clean_settings() -> object:
    """Reset cached settings before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def clear_interrupt() -> object:
    """Drop any cancellation left pending on the test thread."""
    yield
    current_token().clear()
