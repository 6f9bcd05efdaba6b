"""Cooperative cancellation for blocking, thread-bound code.

Python threads cannot be interrupted from the outside, so cancellation is an
explicit flag that blocking waits observe. Every thread owns an implicit
token (see current_token/interrupt); callers may also pass their own.

Semantics follow thread interruption:
    - cancel() sets the flag; it stays set until consumed or cleared
    - sleep() raises Interrupted as soon as the flag is set, and consumes it
    - code that catches Interrupted but cannot honour it should cancel()
      again so its own caller still observes the request

Example:
    >>> token = CancelToken()
    >>> threading.Timer(0.1, token.cancel).start()
    >>> try:
    ...     token.sleep(5.0)
    ... except Interrupted:
    ...     token.cancel()  # re-assert for the caller
"""

from __future__ import annotations

import threading
from weakref import WeakKeyDictionary


class Interrupted(Exception):
    """A blocking wait was cancelled through its CancelToken."""


class CancelToken:
    """Thread-safe cancellation flag with an interruptible sleep."""
    
    __slots__ = ("_event", "_name")
    
    def __init__(self, name: str | None = None) -> None:
        self._event = threading.Event()
        self._name = name
    
    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested and not yet consumed."""
        return self._event.is_set()
    
    def cancel(self) -> None:
        """Request cancellation. Wakes any thread sleeping on this token."""
        self._event.set()
    
    def clear(self) -> bool:
        """Reset the flag. Returns whether it was set."""
        was_set = self._event.is_set()
        self._event.clear()
        return was_set
    
    def sleep(self, seconds: float) -> None:
        """Block for `seconds`, or until cancelled.
        
        Raises:
            Interrupted: If the token is or becomes cancelled. The flag is
                cleared before raising.
        """
        if self._event.wait(max(seconds, 0.0)):
            self._event.clear()
            raise Interrupted(f"sleep interrupted{f' ({self._name})' if self._name else ''}")
    
    def __repr__(self) -> str:
        return f"CancelToken({self._name or ''}{', cancelled' if self.cancelled else ''})"


_tokens: WeakKeyDictionary[threading.Thread, CancelToken] = WeakKeyDictionary()
_tokens_lock = threading.Lock()


def token_for(thread: threading.Thread) -> CancelToken:
    """Get (creating on first use) the implicit token owned by `thread`."""
    with _tokens_lock:
        if (token := _tokens.get(thread)) is None:
            _tokens[thread] = token = CancelToken(thread.name)
        return token


def current_token() -> CancelToken:
    """Implicit cancellation token of the calling thread."""
    return token_for(threading.current_thread())


def interrupt(thread: threading.Thread) -> None:
    """Request cancellation of whatever `thread` is blocked on (or will block on next)."""
    token_for(thread).cancel()


def is_interrupted(thread: threading.Thread | None = None) -> bool:
    """Whether `thread` (default: calling thread) has a pending cancellation request."""
    return token_for(thread or threading.current_thread()).cancelled
