"""Retryer - configurable, cancellable retrying of blocking calls.

Wraps a unit of work (a zero-argument callable) and invokes it until an
attempt is accepted, a stop strategy gives up, or the caller cancels.
Retry conditions, stop strategies and wait strategies are composed once
with a builder into an immutable, thread-safe Retryer.

Quick Start:
    >>> from retryer import RetryerBuilder, fixed_wait, stop_after_attempt
    >>>
    >>> retryer = (
    ...     RetryerBuilder.new_builder()
    ...     .retry_if_exception_of_type(ConnectionError)
    ...     .retry_if_result(lambda r: r is None)
    ...     .with_wait_strategy(fixed_wait(100))
    ...     .with_stop_strategy(stop_after_attempt(3))
    ...     .build()
    ... )
    >>> value = retryer.call(lambda: client.get("/status"))

Failure handling:
    >>> try:
    ...     retryer.call(work)
    ... except AttemptFailedError as e:      # failure not covered by a retry condition
    ...     handle(e.cause)
    ... except RetryExhaustedError as e:     # gave up, or cancelled while waiting
    ...     report(e.failed_attempt_count, e.last_attempt, e.cancelled)

Deferred and decorated use:
    >>> task = retryer.wrap(work)            # run later: task()
    >>> @retryer.decorate
    ... def fetch(url: str) -> bytes: ...

Note:
    Without any retry_if_* condition, the first outcome is final: a failing
    call is propagated (wrapped) without being retried.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import AttemptFailedError, ErrorCode, RetryerError, RetryExhaustedError, RetryStateError

# Configuration
from .foundation.config import RetryerSettings, clear_settings_cache, get_settings

# Time
from .foundation.time import Clock, offset_clock, starting_at, stopped_clock, system_clock

# Cancellation
from .runtime.concurrency import CancelToken, Interrupted, current_token, interrupt, is_interrupted

# Logging
from .runtime.observability import configure_logging, get_logger, log_context

# Retry engine
from .runtime.retry import (
    Attempt,
    RejectionPredicate,
    Retryer,
    RetryerBuilder,
    RetryerCallable,
    StopStrategy,
    TimeUnit,
    WaitStrategy,
    fixed_wait,
    incrementing_wait,
    never_stop,
    no_wait,
    random_wait,
    stop_after_attempt,
    stop_after_delay,
)

__all__ = [
    "__version__",
    # Errors
    "ErrorCode",
    "RetryerError",
    "AttemptFailedError",
    "RetryExhaustedError",
    "RetryStateError",
    # Configuration
    "RetryerSettings",
    "get_settings",
    "clear_settings_cache",
    # Time
    "Clock",
    "system_clock",
    "offset_clock",
    "starting_at",
    "stopped_clock",
    # Cancellation
    "CancelToken",
    "Interrupted",
    "current_token",
    "interrupt",
    "is_interrupted",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
    # Retry engine
    "Attempt",
    "RejectionPredicate",
    "Retryer",
    "RetryerBuilder",
    "RetryerCallable",
    "StopStrategy",
    "WaitStrategy",
    "TimeUnit",
    "never_stop",
    "stop_after_attempt",
    "stop_after_delay",
    "no_wait",
    "fixed_wait",
    "random_wait",
    "incrementing_wait",
]
