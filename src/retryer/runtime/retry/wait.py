"""Wait strategies: how long to sleep before the next attempt.

Each strategy maps (attempts made so far, millis elapsed since the first
attempt) to a non-negative sleep time in milliseconds:
- no_wait(): retry immediately
- fixed_wait(t): always t
- random_wait(max) / random_wait(min, max): uniform in [min, max)
- incrementing_wait(initial, increment): initial + increment * (n - 1), floored at 0
"""

from __future__ import annotations

import random
from typing import Annotated, Protocol, Self, runtime_checkable

from pydantic import Field, model_validator
from pydantic.dataclasses import dataclass

from .units import Duration, TimeUnit, to_millis

# Random instances serialize calls internally; safe to share across threads
_RANDOM = random.Random()


@runtime_checkable
class WaitStrategy(Protocol):
    """Protocol for computing the delay before the next attempt."""
    
    def compute_sleep_time(self, attempt_number: int, elapsed_millis: int) -> int:
        """Milliseconds to sleep after `attempt_number` attempts, `elapsed_millis` after the first one started."""
        ...


@dataclass(frozen=True, slots=True)
class FixedWait:
    """Sleep the same amount of time after every failed attempt."""
    
    sleep_millis: Annotated[int, Field(ge=0)]
    
    def compute_sleep_time(self, attempt_number: int, elapsed_millis: int) -> int:
        return self.sleep_millis


@dataclass(frozen=True, slots=True)
class RandomWait:
    """Sleep a uniformly distributed time in [minimum_millis, maximum_millis)."""
    
    minimum_millis: Annotated[int, Field(ge=0)]
    maximum_millis: int
    
    @model_validator(mode="after")
    def _check_range(self) -> Self:
        if self.maximum_millis <= self.minimum_millis:
            raise ValueError(
                f"maximum must be > minimum but maximum is {self.maximum_millis} and minimum is {self.minimum_millis}"
            )
        return self
    
    def compute_sleep_time(self, attempt_number: int, elapsed_millis: int) -> int:
        return _RANDOM.randrange(self.minimum_millis, self.maximum_millis)


@dataclass(frozen=True, slots=True)
class IncrementingWait:
    """Sleep `initial_millis` after the first failure, `increment_millis` more after each further one.
    
    The increment may be negative; the computed sleep never goes below zero.
    """
    
    initial_millis: Annotated[int, Field(ge=0)]
    increment_millis: int
    
    def compute_sleep_time(self, attempt_number: int, elapsed_millis: int) -> int:
        return max(0, self.initial_millis + self.increment_millis * (attempt_number - 1))


_NO_WAIT = FixedWait(0)


def no_wait() -> WaitStrategy:
    return _NO_WAIT


def fixed_wait(sleep_time: Duration, unit: TimeUnit | str = TimeUnit.MILLISECONDS) -> WaitStrategy:
    """Sleep a fixed amount of time before retrying.
    
    Raises:
        ValueError: If sleep_time is negative
    """
    return FixedWait(to_millis(sleep_time, unit))


def random_wait(
    minimum: Duration,
    maximum: Duration | None = None,
    unit: TimeUnit | str = TimeUnit.MILLISECONDS,
    *,
    maximum_unit: TimeUnit | str | None = None,
) -> WaitStrategy:
    """Sleep a random amount of time before retrying.
    
    random_wait(max) draws from [0, max); random_wait(min, max) from [min, max).
    `maximum_unit` defaults to `unit`.
    
    Raises:
        ValueError: If minimum < 0 or maximum <= minimum
    """
    if maximum is None:
        return RandomWait(0, to_millis(minimum, unit))
    return RandomWait(to_millis(minimum, unit), to_millis(maximum, maximum_unit or unit))


def incrementing_wait(
    initial_sleep_time: Duration,
    increment: Duration,
    unit: TimeUnit | str = TimeUnit.MILLISECONDS,
    *,
    increment_unit: TimeUnit | str | None = None,
) -> WaitStrategy:
    """Sleep `initial_sleep_time` after the first failure, adding `increment` after each further one.
    
    Raises:
        ValueError: If initial_sleep_time is negative
    """
    return IncrementingWait(to_millis(initial_sleep_time, unit), to_millis(increment, increment_unit or unit))
