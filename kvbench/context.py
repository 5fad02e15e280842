"""
Cancellation context for benchmark phases.

A PhaseContext carries an absolute deadline and an event that fires when the
deadline passes or when the context is cancelled explicitly. Workers poll
``done()`` once per iteration and backend adapters call ``raise_if_done()``
before touching the network, so a worker never starts a call after the phase
has ended.

Contexts form a tree: cancelling a parent cancels every child derived from it
with ``with_timeout``.
"""

import threading
import time

from typing import List, Optional

from kvbench.errors import DeadlineExceeded


class PhaseContext:
    """A cancellable context with an optional monotonic deadline."""

    def __init__(self, deadline: Optional[float] = None, parent: Optional["PhaseContext"] = None):
        self.deadline = deadline
        self.parent = parent
        self._event = threading.Event()
        self._children: List["PhaseContext"] = []
        # Reentrant: a signal handler on the main thread may cancel while the lock is held
        self._lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None
        self._reason: Optional[str] = None

        if deadline is not None:
            delay = max(0.0, deadline - time.monotonic())
            self._timer = threading.Timer(delay, self._expire)
            self._timer.daemon = True
            self._timer.start()

    @classmethod
    def background(cls) -> "PhaseContext":
        """Root context that never expires on its own."""
        return cls()

    def with_timeout(self, seconds: float) -> "PhaseContext":
        """Derive a child context that expires ``seconds`` from now or with this one."""
        deadline = time.monotonic() + seconds
        if self.deadline is not None:
            deadline = min(deadline, self.deadline)
        child = PhaseContext(deadline=deadline, parent=self)
        with self._lock:
            if not self._event.is_set():
                self._children.append(child)
        # Also catches a cancel that landed between the check and the append
        if self._event.is_set():
            child.cancel(self._reason)
        return child

    def _expire(self):
        self.cancel("deadline exceeded")

    def cancel(self, reason: str = "context cancelled") -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children = list(self._children)
            self._children.clear()
        if self._timer is not None:
            self._timer.cancel()
        for child in children:
            child.cancel(reason)
        if self.parent is not None:
            self.parent._detach(self)

    def _detach(self, child: "PhaseContext") -> None:
        with self._lock:
            if child in self._children:
                self._children.remove(child)

    def done(self) -> bool:
        if self._event.is_set():
            return True
        # The timer thread may lag slightly behind the clock
        if self.deadline is not None and time.monotonic() >= self.deadline:
            self._expire()
            return True
        return False

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the context is done or ``timeout`` elapses. Returns ``done()``."""
        self._event.wait(timeout)
        return self.done()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` when there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def raise_if_done(self) -> None:
        if self.done():
            raise DeadlineExceeded(f"phase {self._reason or 'deadline exceeded'}")
