import threading

from typing import Dict

from kvbench.context import PhaseContext
from kvbench.interfaces.store import KeyValueStore, StoreOptions


class MemoryStore(KeyValueStore):
    """Process-local store backed by a dict.

    Useful for dry runs of the harness itself and as the reference backend in
    tests: it never fails, so every error it produces came from the workload.
    """

    name = "memory"

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_options(cls, options: StoreOptions) -> "MemoryStore":
        return cls()

    def setup(self, ctx: PhaseContext) -> None:
        ctx.raise_if_done()
        with self._lock:
            self._data.clear()

    def set(self, ctx: PhaseContext, key: str, value: str) -> None:
        ctx.raise_if_done()
        with self._lock:
            self._data[key] = value

    def get(self, ctx: PhaseContext, key: str) -> str:
        ctx.raise_if_done()
        with self._lock:
            return self._data.get(key, "")

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._data)

    def __len__(self):
        with self._lock:
            return len(self._data)
