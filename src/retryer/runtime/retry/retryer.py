"""Retry execution engine.

A Retryer repeatedly invokes a unit of work until an attempt is accepted,
its stop strategy says to give up, or the wait between attempts is
cancelled:

    ATTEMPT -> CLASSIFY -> ACCEPT          (return value / raise AttemptFailedError)
                        -> STOP            (raise RetryExhaustedError)
                        -> WAIT -> ATTEMPT

Everything runs on the calling thread. Elapsed times given to strategies
are measured from the start of the first attempt, and attempt numbers are
the count of attempts already made (1-based).

Example:
    >>> retryer = (
    ...     RetryerBuilder.new_builder()
    ...     .retry_if_exception_of_type(ConnectionError)
    ...     .with_wait_strategy(fixed_wait(200))
    ...     .with_stop_strategy(stop_after_attempt(5))
    ...     .build()
    ... )
    >>> rows = retryer.call(lambda: db.fetch_all(query))
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Callable, Generic, ParamSpec, TypeVar

from retryer.foundation.errors import RetryExhaustedError
from retryer.foundation.time import Clock, system_clock
from retryer.runtime.concurrency import CancelToken, Interrupted, current_token
from retryer.runtime.observability import get_logger

from .attempt import Attempt
from .predicate import RejectionPredicate
from .stop import StopStrategy
from .wait import WaitStrategy

V = TypeVar("V")
P = ParamSpec("P")

RetryListener = Callable[[Attempt[object], int, int], None]

log = get_logger("retryer.retry")


@dataclass(frozen=True, slots=True)
class Retryer(Generic[V]):
    """Immutable retry configuration and the loop that applies it.
    
    Build instances with RetryerBuilder. A Retryer holds no per-call state
    and may be used by several threads at once.
    """
    
    stop_strategy: StopStrategy
    wait_strategy: WaitStrategy
    rejection_predicate: RejectionPredicate[V]
    clock: Clock = system_clock()
    listeners: tuple[RetryListener, ...] = ()
    
    def call(self, work: Callable[[], V], *, token: CancelToken | None = None) -> V:
        """Run `work` until it succeeds or retrying stops.
        
        Args:
            work: Zero-argument callable to invoke
            token: Cancellation token observed while waiting between
                attempts (default: the calling thread's token)
        
        Returns:
            The value of the first accepted attempt
        
        Raises:
            AttemptFailedError: An attempt raised and was not retried
            RetryExhaustedError: The stop strategy gave up, or the wait was
                interrupted (the token is cancelled again before raising)
        """
        start = self.clock.now_millis()
        attempt_number = 1
        while True:
            attempt = Attempt.capture(work)
            if not self.rejection_predicate(attempt):
                return attempt.get()
            
            elapsed = self.clock.now_millis() - start
            if self.stop_strategy.should_stop(attempt_number, elapsed):
                log.warning("retries exhausted", attempts=attempt_number, elapsed_ms=elapsed,
                            outcome=_describe(attempt))
                raise RetryExhaustedError(attempt_number, attempt)
            
            sleep_millis = self.wait_strategy.compute_sleep_time(attempt_number, elapsed)
            log.debug("attempt rejected, retrying", attempt=attempt_number, sleep_ms=sleep_millis,
                      outcome=_describe(attempt))
            for listener in self.listeners:
                listener(attempt, attempt_number, sleep_millis)
            
            sleeper = token or current_token()
            try:
                sleeper.sleep(sleep_millis / 1000)
            except Interrupted as e:
                sleeper.cancel()
                log.warning("retry wait interrupted", attempts=attempt_number)
                raise RetryExhaustedError(attempt_number, attempt, e) from e
            attempt_number += 1
    
    def wrap(self, work: Callable[[], V]) -> RetryerCallable[V]:
        """Bind `work` to this retryer without running it."""
        return RetryerCallable(self, work)
    
    def decorate(self, func: Callable[P, V]) -> Callable[P, V]:
        """Decorator form: every call of the returned function is retried."""
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> V:
            return self.call(lambda: func(*args, **kwargs))
        return wrapper


@dataclass(frozen=True, slots=True)
class RetryerCallable(Generic[V]):
    """Deferred `retryer.call(work)`, for hand-off to other scheduling code.
    
    Calling it runs the full retry loop on the invoking thread, observing
    that thread's cancellation token.
    """
    
    retryer: Retryer[V]
    work: Callable[[], V]
    
    def __call__(self) -> V:
        return self.retryer.call(self.work)


def _describe(attempt: Attempt[object]) -> str:
    if attempt.has_result():
        return f"result={attempt.result!r:.80}"
    return f"{type(attempt.failure_cause).__name__}: {attempt.failure_cause}"
