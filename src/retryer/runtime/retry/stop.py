"""Stop strategies: when to give up retrying.

A stop strategy is consulted after each rejected attempt with the number of
attempts made so far (1-based) and the milliseconds elapsed since the first
attempt started. All strategies are immutable and safe to share.

- never_stop(): retry until success (or cancellation)
- stop_after_attempt(n): give up once n attempts have been made
- stop_after_delay(d): give up once d has elapsed since the first attempt
"""

from __future__ import annotations

from typing import Annotated, Protocol, runtime_checkable

from pydantic import Field
from pydantic.dataclasses import dataclass

from .units import Duration, TimeUnit, to_millis


@runtime_checkable
class StopStrategy(Protocol):
    """Protocol for deciding when to stop retrying."""
    
    def should_stop(self, attempt_number: int, elapsed_millis: int) -> bool:
        """Whether to stop after `attempt_number` attempts, `elapsed_millis` after the first one started."""
        ...


@dataclass(frozen=True, slots=True)
class NeverStop:
    def should_stop(self, attempt_number: int, elapsed_millis: int) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class StopAfterAttempt:
    """Stop once `max_attempt_number` attempts have been made."""
    
    max_attempt_number: Annotated[int, Field(ge=1)]
    
    def should_stop(self, attempt_number: int, elapsed_millis: int) -> bool:
        return attempt_number >= self.max_attempt_number


@dataclass(frozen=True, slots=True)
class StopAfterDelay:
    """Stop once `max_delay_millis` have elapsed since the start of the first attempt."""
    
    max_delay_millis: Annotated[int, Field(ge=0)]
    
    def should_stop(self, attempt_number: int, elapsed_millis: int) -> bool:
        return elapsed_millis >= self.max_delay_millis


_NEVER_STOP = NeverStop()


def never_stop() -> StopStrategy:
    return _NEVER_STOP


def stop_after_attempt(attempt_number: int) -> StopStrategy:
    """Stop after `attempt_number` failed attempts.
    
    Raises:
        ValueError: If attempt_number < 1
    """
    return StopAfterAttempt(attempt_number)


def stop_after_delay(delay: Duration, unit: TimeUnit | str = TimeUnit.MILLISECONDS) -> StopStrategy:
    """Stop once `delay` has elapsed since the first attempt started.
    
    Raises:
        ValueError: If delay is negative
    """
    return StopAfterDelay(to_millis(delay, unit))
