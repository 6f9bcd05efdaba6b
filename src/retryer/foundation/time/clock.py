"""Time sources.

The retry engine measures elapsed time through a Clock so tests and callers
can substitute a controlled notion of "now":
- system_clock(): the real wall clock
- offset_clock(): the wall clock shifted by a fixed offset
- stopped_clock(): a clock frozen at a given instant
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current time, in milliseconds since the epoch."""
    
    def now_millis(self) -> int: ...


def _system_millis() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True, slots=True)
class SystemClock:
    """Real wall clock."""
    
    def now_millis(self) -> int:
        return _system_millis()
    
    def now(self) -> datetime:
        return _to_datetime(self.now_millis())


@dataclass(frozen=True, slots=True)
class OffsetClock:
    """Wall clock shifted by `offset_millis`. Time keeps flowing."""
    
    offset_millis: int
    
    def now_millis(self) -> int:
        return _system_millis() + self.offset_millis
    
    def now(self) -> datetime:
        return _to_datetime(self.now_millis())


@dataclass(frozen=True, slots=True)
class StoppedClock:
    """Clock that always returns the same instant."""
    
    at_millis: int
    
    def now_millis(self) -> int:
        return self.at_millis
    
    def now(self) -> datetime:
        return _to_datetime(self.at_millis)


_SYSTEM_CLOCK = SystemClock()


def system_clock() -> SystemClock:
    return _SYSTEM_CLOCK


def offset_clock(offset: int | timedelta) -> OffsetClock:
    """Clock running `offset` ahead of (or, if negative, behind) the wall clock.
    
    Args:
        offset: Milliseconds, or a timedelta
    """
    return OffsetClock(_millis(offset))


def starting_at(instant: int | datetime) -> OffsetClock:
    """Clock whose current time is `instant` now, and which then keeps flowing."""
    return OffsetClock(_millis(instant) - _system_millis())


def stopped_clock(instant: int | datetime) -> StoppedClock:
    """Clock frozen at `instant` (epoch milliseconds or an aware/naive datetime)."""
    return StoppedClock(_millis(instant))


def _millis(value: int | timedelta | datetime) -> int:
    match value:
        case timedelta():
            return value // timedelta(milliseconds=1)
        case datetime():
            return int(value.timestamp() * 1000)
        case _:
            return int(value)


def _to_datetime(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=UTC)
