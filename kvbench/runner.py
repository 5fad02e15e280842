"""
Phase runner: one bounded window of concurrent load.

run_phase starts one worker thread per key index behind a start gate, derives
the deadline-bound context once every thread exists, releases the gate, blocks
until the deadline fires, then joins the workers within a short
grace period before reading the counters. Workers that are still stuck inside
a backend call when the grace period ends are counted as stragglers and left
to finish on their own; their late increments are not part of the result.
"""

import threading
import time

from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional

from kvbench.config import DRAIN_GRACE_SECONDS
from kvbench.context import PhaseContext
from kvbench.interfaces.store import KeyValueStore
from kvbench.stats import Stats
from kvbench.workloads import Workload

PROGRESS_INTERVAL_SECONDS = 0.5

ProgressFunc = Callable[..., None]


@dataclass(frozen=True)
class PhaseResult:
    """Counters and timing of one finished phase."""
    phase: str
    elapsed: float
    ok: int
    err: int
    workers: int
    stragglers: int = 0

    @property
    def total(self) -> int:
        return self.ok + self.err

    @property
    def ops_per_sec(self) -> int:
        if self.elapsed <= 0:
            return 0
        return int(self.total / self.elapsed)

    def as_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result['total'] = self.total
        result['ops_per_sec'] = self.ops_per_sec
        return result


class StartGate:
    """Holds started workers until the phase context exists, then releases them together."""

    def __init__(self):
        self._event = threading.Event()
        self._ctx: Optional[PhaseContext] = None

    def open(self, ctx: PhaseContext) -> None:
        self._ctx = ctx
        self._event.set()

    def wait(self) -> PhaseContext:
        self._event.wait()
        return self._ctx


def _gated_worker(gate: StartGate, workload: Workload, store: KeyValueStore, i: int, stats: Stats) -> None:
    workload(gate.wait(), store, i, stats)


def start_workers(gate: StartGate, phase: str, workload: Workload, store: KeyValueStore,
                  worker_count: int, stats: Stats) -> List[threading.Thread]:
    """Start one thread per key index. Each blocks on ``gate`` before its first call."""
    threads = []
    for i in range(worker_count):
        thread = threading.Thread(
            target=_gated_worker,
            args=(gate, workload, store, i, stats),
            name=f"{phase}-worker-{i}",
            daemon=True,
        )
        threads.append(thread)
        thread.start()
    return threads


def drain_workers(threads: List[threading.Thread], grace: float) -> int:
    """Join ``threads`` within ``grace`` seconds in total. Returns how many are still alive."""
    deadline = time.monotonic() + grace
    for thread in threads:
        thread.join(timeout=max(0.0, deadline - time.monotonic()))
    return sum(1 for thread in threads if thread.is_alive())


def run_phase(parent: PhaseContext, phase: str, workload: Workload, store: KeyValueStore,
              worker_count: int, duration: float, logger=None,
              progress: Optional[ProgressFunc] = None,
              drain_grace: float = DRAIN_GRACE_SECONDS) -> PhaseResult:
    """Run ``workload`` on ``worker_count`` threads for ``duration`` seconds.

    Args:
        parent: Context the phase deadline is derived from.
        phase: Phase name used for thread names and the result.
        workload: Worker loop, called as ``workload(ctx, store, i, stats)``.
        store: Backend shared by all workers.
        worker_count: Number of worker threads, one per key index.
        duration: Phase length in seconds.
        logger: Logger receiving failure messages and drain warnings.
        progress: Optional ``update(completed=seconds)`` callback, ticked while waiting.
        drain_grace: Seconds to wait for workers after the deadline.

    Returns:
        PhaseResult read after the drain barrier.
    """
    stats = Stats(logger=logger)
    gate = StartGate()
    threads = start_workers(gate, phase, workload, store, worker_count, stats)
    if logger is not None:
        logger.verbose(f'Started {len(threads)} workers for phase {phase}')

    # Thread start-up is not part of the phase window
    ctx = parent.with_timeout(duration)
    start = time.monotonic()
    gate.open(ctx)

    while not ctx.wait(timeout=PROGRESS_INTERVAL_SECONDS):
        if progress is not None:
            progress(completed=min(duration, time.monotonic() - start))
    elapsed = time.monotonic() - start
    if progress is not None:
        progress(completed=duration)

    stragglers = drain_workers(threads, drain_grace)
    if stragglers and logger is not None:
        logger.warning(f'{stragglers} worker(s) still inside a backend call {drain_grace:.1f}s after '
                       f'the {phase} phase ended; their late results are not counted')

    ok, err = stats.snapshot()
    return PhaseResult(
        phase=phase,
        elapsed=elapsed,
        ok=ok,
        err=err,
        workers=worker_count,
        stragglers=stragglers,
    )
