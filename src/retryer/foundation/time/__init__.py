"""Clock abstraction used as the engine's time source."""

from .clock import (
    Clock,
    OffsetClock,
    StoppedClock,
    SystemClock,
    offset_clock,
    starting_at,
    stopped_clock,
    system_clock,
)

__all__ = [
    "Clock",
    "SystemClock",
    "OffsetClock",
    "StoppedClock",
    "system_clock",
    "offset_clock",
    "starting_at",
    "stopped_clock",
]
