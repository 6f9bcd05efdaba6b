"""Cooperative cancellation primitives.

Key Components:
    - CancelToken: Cancellation flag with an interruptible sleep
    - Interrupted: Raised when a sleep is cancelled
    - current_token / token_for / interrupt: Per-thread implicit tokens

Example:
    >>> from retryer.runtime.concurrency import interrupt, current_token
    >>> worker = threading.Thread(target=poll_forever)
    >>> worker.start()
    >>> interrupt(worker)  # wakes worker's next/current sleep
"""

from __future__ import annotations

from .cancel import CancelToken, Interrupted, current_token, interrupt, is_interrupted, token_for

__all__ = [
    "CancelToken",
    "Interrupted",
    "current_token",
    "interrupt",
    "is_interrupted",
    "token_for",
]
