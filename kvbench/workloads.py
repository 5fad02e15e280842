"""
Worker loops for the write and read-verify phases.

Each worker owns one key for the whole phase and hammers it as fast as the
backend allows until the phase context is done. There is no backoff and no
pacing. Every attempt ends in exactly one Stats call.
"""

from typing import Callable, Dict

from kvbench.config import PHASE
from kvbench.context import PhaseContext
from kvbench.errors import DataIntegrityError
from kvbench.interfaces.store import KeyValueStore
from kvbench.stats import Stats

Workload = Callable[[PhaseContext, KeyValueStore, int, Stats], None]


def key_for(i: int) -> str:
    return f"key_{i}"


def value_for(i: int) -> str:
    return f"value_{i}"


def run_set(ctx: PhaseContext, store: KeyValueStore, i: int, stats: Stats) -> None:
    key = key_for(i)
    value = value_for(i)

    while not ctx.done():
        try:
            store.set(ctx, key, value)
        except Exception as e:
            stats.record_failure(e)
            continue
        stats.record_success()


def run_get(ctx: PhaseContext, store: KeyValueStore, i: int, stats: Stats) -> None:
    key = key_for(i)
    expected = value_for(i)

    while not ctx.done():
        try:
            value = store.get(ctx, key)
        except Exception as e:
            stats.record_failure(e)
            continue

        if value != expected:
            stats.record_failure(DataIntegrityError(key, expected, value))
            continue

        stats.record_success()


WORKLOADS: Dict[str, Workload] = {
    PHASE.set.value: run_set,
    PHASE.get.value: run_get,
}
