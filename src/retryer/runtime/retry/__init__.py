"""Retry engine: attempts, strategies, predicates, builder and executor.

Example:
    >>> from retryer.runtime.retry import RetryerBuilder, fixed_wait, stop_after_attempt
    >>> 
    >>> retryer = (
    ...     RetryerBuilder.new_builder()
    ...     .retry_if_exception_of_type(ConnectionError)
    ...     .with_wait_strategy(fixed_wait(250))
    ...     .with_stop_strategy(stop_after_attempt(4))
    ...     .build()
    ... )
    >>> retryer.call(fetch_quote)
"""

from .attempt import Attempt
from .builder import RetryerBuilder
from .predicate import (
    UNEXPECTED_ERRORS,
    Condition,
    FailurePredicateCondition,
    FailureTypeCondition,
    RejectionPredicate,
    ResultPredicateCondition,
)
from .retryer import Retryer, RetryerCallable, RetryListener
from .stop import NeverStop, StopAfterAttempt, StopAfterDelay, StopStrategy, never_stop, stop_after_attempt, stop_after_delay
from .units import TimeUnit, to_millis
from .wait import (
    FixedWait,
    IncrementingWait,
    RandomWait,
    WaitStrategy,
    fixed_wait,
    incrementing_wait,
    no_wait,
    random_wait,
)

__all__ = [
    # Outcome
    "Attempt",
    # Stop strategies
    "StopStrategy",
    "NeverStop",
    "StopAfterAttempt",
    "StopAfterDelay",
    "never_stop",
    "stop_after_attempt",
    "stop_after_delay",
    # Wait strategies
    "WaitStrategy",
    "FixedWait",
    "RandomWait",
    "IncrementingWait",
    "no_wait",
    "fixed_wait",
    "random_wait",
    "incrementing_wait",
    # Durations
    "TimeUnit",
    "to_millis",
    # Retry conditions
    "RejectionPredicate",
    "Condition",
    "FailureTypeCondition",
    "FailurePredicateCondition",
    "ResultPredicateCondition",
    "UNEXPECTED_ERRORS",
    # Execution
    "RetryerBuilder",
    "Retryer",
    "RetryerCallable",
    "RetryListener",
]
