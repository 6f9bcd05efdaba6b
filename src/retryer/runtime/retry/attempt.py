"""Outcome of a single invocation of a retried unit of work.

An Attempt is a discriminated union: it holds either the value returned by
the call or the exception it raised, never both and never neither. It is
immutable and created by the Retryer after each invocation.

Example:
    >>> attempt = Attempt.capture(lambda: int("42"))
    >>> attempt.has_result(), attempt.result
    (True, 42)
    
    >>> failed = Attempt.capture(lambda: int("x"))
    >>> failed.has_failure(), type(failed.failure_cause).__name__
    (True, 'ValueError')
    >>> failed.get()
    Traceback (most recent call last):
    AttemptFailedError: ValueError: invalid literal for int() with base 10: 'x'
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar, cast

from retryer.foundation.errors import AttemptFailedError, RetryStateError

V = TypeVar("V")


class Attempt(Generic[V]):
    """Immutable result of one call: a value, or the exception raised.
    
    Use Attempt.of_result(), Attempt.of_failure() or Attempt.capture().
    """
    
    __slots__ = ("_value", "_has_result")
    
    def __init__(self, value: V | BaseException, has_result: bool) -> None:
        """Private constructor. Use the classmethods instead."""
        if not has_result and not isinstance(value, BaseException):
            raise TypeError(f"failure cause must be an exception, got {type(value).__name__}")
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_has_result", has_result)
    
    @classmethod
    def of_result(cls, value: V) -> Attempt[V]:
        """Attempt whose call returned `value` (None is a valid result)."""
        return cls(value, True)
    
    @classmethod
    def of_failure(cls, cause: BaseException) -> Attempt[V]:
        """Attempt whose call raised `cause`."""
        return cls(cause, False)
    
    @classmethod
    def capture(cls, work: Callable[[], V]) -> Attempt[V]:
        """Invoke `work` and capture its outcome.
        
        Any Exception is captured as the failure variant. BaseExceptions that
        are not Exceptions (KeyboardInterrupt, SystemExit, GeneratorExit)
        are not outcomes of the work and propagate unchanged.
        """
        try:
            value = work()
        except Exception as e:
            return cls(e, False)
        return cls(value, True)
    
    # ─────────────────────────────────────────────────────────────────
    # Variant checks
    # ─────────────────────────────────────────────────────────────────
    
    def has_result(self) -> bool:
        """True if the call returned (possibly None)."""
        return self._has_result
    
    def has_failure(self) -> bool:
        """True if the call raised."""
        return not self._has_result
    
    # ─────────────────────────────────────────────────────────────────
    # Value extraction
    # ─────────────────────────────────────────────────────────────────
    
    def get(self) -> V:
        """Return the result, or raise the captured failure wrapped.
        
        Raises:
            AttemptFailedError: If the call raised; the original exception
                is available as `.cause`
        """
        if self._has_result:
            return cast(V, self._value)
        raise AttemptFailedError(cast(BaseException, self._value))
    
    @property
    def result(self) -> V:
        """The returned value.
        
        Raises:
            RetryStateError: If the call raised instead
        """
        if self._has_result:
            return cast(V, self._value)
        raise RetryStateError(f"Attempt has no result, it failed with {self._value!r}")
    
    @property
    def failure_cause(self) -> BaseException:
        """The exception raised by the call.
        
        Raises:
            RetryStateError: If the call returned a result instead
        """
        if not self._has_result:
            return cast(BaseException, self._value)
        raise RetryStateError(f"Attempt has no failure, it returned {self._value!r}")
    
    # ─────────────────────────────────────────────────────────────────
    # Dunder methods
    # ─────────────────────────────────────────────────────────────────
    
    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")
    
    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")
    
    def __repr__(self) -> str:
        return f"Attempt.{'of_result' if self._has_result else 'of_failure'}({self._value!r})"
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attempt):
            return NotImplemented
        return self._has_result == other._has_result and self._value == other._value
    
    def __hash__(self) -> int:
        return hash((self._has_result, self._value))
