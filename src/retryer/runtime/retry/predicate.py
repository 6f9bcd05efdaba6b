"""Rejection predicate: decides whether an attempt should be retried.

Conditions are a tagged union of three kinds, OR-reduced at evaluation:
- FailureTypeCondition: the call raised an instance of one of `types`
- FailurePredicateCondition: the call raised and `predicate(exc)` holds
- ResultPredicateCondition: the call returned and `predicate(value)` holds

With no condition the predicate is always False: the first outcome is final.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from .attempt import Attempt

V = TypeVar("V")

# Errors signalling a defect in code rather than a failing environment
UNEXPECTED_ERRORS: tuple[type[Exception], ...] = (
    RuntimeError,
    ValueError,
    TypeError,
    LookupError,
    AttributeError,
    ArithmeticError,
    AssertionError,
)


@dataclass(frozen=True, slots=True)
class FailureTypeCondition:
    types: tuple[type[BaseException], ...]


@dataclass(frozen=True, slots=True)
class FailurePredicateCondition:
    predicate: Callable[[BaseException], bool]


@dataclass(frozen=True, slots=True)
class ResultPredicateCondition(Generic[V]):
    predicate: Callable[[V], bool]


Condition = FailureTypeCondition | FailurePredicateCondition | ResultPredicateCondition


def _matches(condition: Condition, attempt: Attempt[V]) -> bool:
    match condition:
        case FailureTypeCondition(types=types):
            return attempt.has_failure() and isinstance(attempt.failure_cause, types)
        case FailurePredicateCondition(predicate=predicate):
            return attempt.has_failure() and bool(predicate(attempt.failure_cause))
        case ResultPredicateCondition(predicate=predicate):
            return attempt.has_result() and bool(predicate(attempt.result))
    raise TypeError(f"Unknown condition: {condition!r}")


@dataclass(frozen=True, slots=True)
class RejectionPredicate(Generic[V]):
    """OR of the registered conditions. True means: retry this attempt."""
    
    conditions: tuple[Condition, ...] = ()
    
    def __call__(self, attempt: Attempt[V]) -> bool:
        return any(_matches(c, attempt) for c in self.conditions)
    
    def or_(self, condition: Condition) -> RejectionPredicate[V]:
        """New predicate that also matches `condition`."""
        return RejectionPredicate((*self.conditions, condition))
