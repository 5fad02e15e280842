"""
Per-phase success and error counters.

One Stats instance is shared by every worker of a phase. Each completed
attempt increments exactly one counter. Failures caused by the phase deadline
are dropped here: they are the expected race between a worker's last call and
the end of the phase, not a backend fault.
"""

import threading

from typing import Tuple

from kvbench.errors import DeadlineExceeded


class Stats:
    """Thread-safe ok/err counters with failure classification."""

    def __init__(self, logger=None):
        self.logger = logger
        self._ok = 0
        self._err = 0
        self._lock = threading.Lock()

    def record_success(self) -> None:
        with self._lock:
            self._ok += 1

    def record_failure(self, err: BaseException) -> None:
        if isinstance(err, DeadlineExceeded):
            return
        if self.logger is not None:
            self.logger.error(str(err))
        with self._lock:
            self._err += 1

    def snapshot(self) -> Tuple[int, int]:
        """Return ``(ok, err)`` read together."""
        with self._lock:
            return self._ok, self._err

    @property
    def ok(self) -> int:
        return self.snapshot()[0]

    @property
    def err(self) -> int:
        return self.snapshot()[1]

    @property
    def total(self) -> int:
        ok, err = self.snapshot()
        return ok + err
