"""Duration handling for strategy factories.

Strategies compute in integer milliseconds. Factories accept an amount plus
an explicit TimeUnit, or a timedelta.
"""

from __future__ import annotations

import math
from datetime import timedelta
from enum import StrEnum


class TimeUnit(StrEnum):
    MILLISECONDS = "ms"
    SECONDS = "s"
    MINUTES = "min"
    HOURS = "h"
    DAYS = "d"
    
    def to_millis(self, amount: float) -> int:
        """Convert `amount` of this unit to whole milliseconds (rounded down, so negative amounts stay negative)."""
        return math.floor(amount * _MILLIS_PER_UNIT[self])


_MILLIS_PER_UNIT: dict[TimeUnit, int] = {
    TimeUnit.MILLISECONDS: 1,
    TimeUnit.SECONDS: 1_000,
    TimeUnit.MINUTES: 60_000,
    TimeUnit.HOURS: 3_600_000,
    TimeUnit.DAYS: 86_400_000,
}

Duration = float | timedelta


def to_millis(duration: Duration, unit: TimeUnit | str = TimeUnit.MILLISECONDS) -> int:
    """Normalize a duration to milliseconds. `unit` is ignored for timedeltas."""
    if isinstance(duration, timedelta):
        return duration // timedelta(milliseconds=1)
    return TimeUnit(unit).to_millis(duration)
