"""Exception hierarchy for the retry engine.

Distinguishes three situations a caller must be able to tell apart:
- AttemptFailedError: the unit of work failed and the failure was not retried
- RetryExhaustedError: retrying stopped without a successful result
- RetryStateError: the API was misused (a bug in the calling code)
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from retryer.runtime.retry.attempt import Attempt


class ErrorCode(StrEnum):
    """Machine-readable classification of retry engine errors."""
    ATTEMPT_FAILED = "ATTEMPT_FAILED"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    CANCELLED = "CANCELLED"
    INVALID_STATE = "INVALID_STATE"


class RetryerError(Exception):
    """Base class for failures surfaced by Retryer.call()."""
    
    code: ErrorCode = ErrorCode.ATTEMPT_FAILED


class AttemptFailedError(RetryerError):
    """The unit of work raised, and that failure is being propagated.
    
    Raised by Attempt.get() on a failed attempt, and by Retryer.call() when
    a failed attempt is accepted as final. The original exception is kept
    in the `cause` field (and chained as __cause__).
    """
    
    __slots__ = ("cause",)
    
    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.__cause__ = cause


class RetryExhaustedError(RetryerError):
    """Retrying stopped without a successful result.
    
    Attributes:
        failed_attempt_count: Number of attempts made before giving up (>= 1)
        last_attempt: The last rejected attempt
        cancellation_cause: Set when the wait before the next attempt was interrupted
    """
    
    __slots__ = ("failed_attempt_count", "last_attempt", "cancellation_cause")
    
    def __init__(
        self,
        failed_attempt_count: int,
        last_attempt: Attempt[object],
        cancellation_cause: BaseException | None = None,
    ) -> None:
        if last_attempt is None:
            raise TypeError("last_attempt may not be None")
        self.failed_attempt_count = failed_attempt_count
        self.last_attempt = last_attempt
        self.cancellation_cause = cancellation_cause
        reason = "interrupted while waiting" if cancellation_cause is not None else "stop condition reached"
        super().__init__(f"Retrying failed to complete successfully after {failed_attempt_count} attempts ({reason})")
        if cancellation_cause is not None:
            self.__cause__ = cancellation_cause
    
    @property
    def code(self) -> ErrorCode:  # type: ignore[override]
        return ErrorCode.CANCELLED if self.cancelled else ErrorCode.RETRY_EXHAUSTED
    
    @property
    def cancelled(self) -> bool:
        """Whether retrying stopped because of a cancellation signal."""
        return self.cancellation_cause is not None


class RetryStateError(RuntimeError):
    """Programming error: an object was used in a state that does not allow it."""
    
    code: ErrorCode = ErrorCode.INVALID_STATE
