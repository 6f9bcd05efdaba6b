"""Error types for the retry engine.

- ErrorCode: Classification of engine errors
- AttemptFailedError: Propagated failure of a non-retried attempt
- RetryExhaustedError: Terminal failure when retrying stops
- RetryStateError: API misuse
"""

from .errors import AttemptFailedError, ErrorCode, RetryerError, RetryExhaustedError, RetryStateError

__all__ = ["ErrorCode", "RetryerError", "AttemptFailedError", "RetryExhaustedError", "RetryStateError"]
