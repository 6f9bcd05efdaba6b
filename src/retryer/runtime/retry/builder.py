"""Builder for Retryer instances.

Collects at most one stop strategy, one wait strategy and one clock, plus
any number of retry conditions (OR-ed together), then produces an
immutable Retryer.

Defaults:
    - stop strategy: never_stop() (retry until success)
    - wait strategy: no_wait() (retry immediately)
    - retry conditions: none (the first outcome, success or failure, is final)

Example:
    >>> retryer = (
    ...     RetryerBuilder.new_builder()
    ...     .retry_if_result(lambda r: r is None)
    ...     .retry_if_exception_of_type(TimeoutError)
    ...     .with_wait_strategy(incrementing_wait(100, 100))
    ...     .with_stop_strategy(stop_after_delay(10, TimeUnit.SECONDS))
    ...     .build()
    ... )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from retryer.foundation.errors import RetryStateError
from retryer.foundation.time import Clock, system_clock

from .predicate import (
    UNEXPECTED_ERRORS,
    FailurePredicateCondition,
    FailureTypeCondition,
    RejectionPredicate,
    ResultPredicateCondition,
)
from .retryer import RetryListener, Retryer
from .stop import StopStrategy, never_stop
from .wait import WaitStrategy, no_wait

if TYPE_CHECKING:
    from retryer.foundation.config import RetryerSettings

V = TypeVar("V")


class RetryerBuilder(Generic[V]):
    """Mutable, single-use assembly of a Retryer."""
    
    __slots__ = ("_stop_strategy", "_wait_strategy", "_clock", "_predicate", "_listeners")
    
    def __init__(self) -> None:
        self._stop_strategy: StopStrategy | None = None
        self._wait_strategy: WaitStrategy | None = None
        self._clock: Clock | None = None
        self._predicate: RejectionPredicate[V] = RejectionPredicate()
        self._listeners: tuple[RetryListener, ...] = ()
    
    @classmethod
    def new_builder(cls) -> RetryerBuilder[V]:
        return cls()
    
    @classmethod
    def from_settings(cls, settings: RetryerSettings | None = None) -> RetryerBuilder[V]:
        """Builder pre-loaded with the stop/wait strategies configured in settings.
        
        Strategies left unconfigured keep the builder defaults and may still
        be set on the returned builder.
        """
        from retryer.foundation.config import get_settings
        strategy = (settings or get_settings()).strategy
        builder: RetryerBuilder[V] = cls()
        if (stop := strategy.stop_strategy()) is not None:
            builder.with_stop_strategy(stop)
        if (wait := strategy.wait_strategy()) is not None:
            builder.with_wait_strategy(wait)
        return builder
    
    # ─────────────────────────────────────────────────────────────────
    # One-shot settings
    # ─────────────────────────────────────────────────────────────────
    
    def with_wait_strategy(self, wait_strategy: WaitStrategy) -> RetryerBuilder[V]:
        """Set how long to sleep between failed attempts.
        
        Raises:
            RetryStateError: If a wait strategy has already been set
        """
        if wait_strategy is None:
            raise TypeError("wait_strategy may not be None")
        if self._wait_strategy is not None:
            raise RetryStateError(f"a wait strategy has already been set {self._wait_strategy!r}")
        self._wait_strategy = wait_strategy
        return self
    
    def with_stop_strategy(self, stop_strategy: StopStrategy) -> RetryerBuilder[V]:
        """Set when to stop retrying.
        
        Raises:
            RetryStateError: If a stop strategy has already been set
        """
        if stop_strategy is None:
            raise TypeError("stop_strategy may not be None")
        if self._stop_strategy is not None:
            raise RetryStateError(f"a stop strategy has already been set {self._stop_strategy!r}")
        self._stop_strategy = stop_strategy
        return self
    
    def with_clock(self, clock: Clock) -> RetryerBuilder[V]:
        """Set the time source used to measure elapsed time.
        
        Raises:
            RetryStateError: If a clock has already been set
        """
        if clock is None:
            raise TypeError("clock may not be None")
        if self._clock is not None:
            raise RetryStateError(f"a clock has already been set {self._clock!r}")
        self._clock = clock
        return self
    
    def with_retry_listener(self, listener: RetryListener) -> RetryerBuilder[V]:
        """Add a callback run as listener(attempt, attempt_number, sleep_millis) before each wait."""
        if listener is None:
            raise TypeError("listener may not be None")
        self._listeners = (*self._listeners, listener)
        return self
    
    # ─────────────────────────────────────────────────────────────────
    # Retry conditions (cumulative)
    # ─────────────────────────────────────────────────────────────────
    
    def retry_if_exception(self) -> RetryerBuilder[V]:
        """Retry if the call raises any Exception."""
        return self.retry_if_exception_of_type(Exception)
    
    def retry_if_runtime_error(self) -> RetryerBuilder[V]:
        """Retry if the call raises a bug-class error (RuntimeError, ValueError, TypeError, ...)."""
        self._predicate = self._predicate.or_(FailureTypeCondition(UNEXPECTED_ERRORS))
        return self
    
    def retry_if_exception_of_type(self, *exception_types: type[BaseException]) -> RetryerBuilder[V]:
        """Retry if the call raises an instance of any of `exception_types` (subclasses included)."""
        if not exception_types:
            raise TypeError("at least one exception type is required")
        for t in exception_types:
            if not (isinstance(t, type) and issubclass(t, BaseException)):
                raise TypeError(f"{t!r} is not an exception type")
        self._predicate = self._predicate.or_(FailureTypeCondition(exception_types))
        return self
    
    def retry_if_exception_matching(self, predicate: Callable[[BaseException], bool]) -> RetryerBuilder[V]:
        """Retry if the call raises an exception satisfying `predicate`."""
        if predicate is None:
            raise TypeError("exception predicate may not be None")
        self._predicate = self._predicate.or_(FailurePredicateCondition(predicate))
        return self
    
    def retry_if_result(self, predicate: Callable[[V], bool]) -> RetryerBuilder[V]:
        """Retry if the call returns a value satisfying `predicate`."""
        if predicate is None:
            raise TypeError("result predicate may not be None")
        self._predicate = self._predicate.or_(ResultPredicateCondition(predicate))
        return self
    
    def build(self) -> Retryer[V]:
        return Retryer(
            stop_strategy=self._stop_strategy or never_stop(),
            wait_strategy=self._wait_strategy or no_wait(),
            rejection_predicate=self._predicate,
            clock=self._clock or system_clock(),
            listeners=self._listeners,
        )
    
    def __repr__(self) -> str:
        return (f"RetryerBuilder(stop={self._stop_strategy!r}, wait={self._wait_strategy!r}, "
                f"conditions={len(self._predicate.conditions)})")
