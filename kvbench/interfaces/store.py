"""
Key-value store interface for kvbench.

This module defines the abstract interface every benchmarked backend must
implement. The workload runner is written against this interface only, so a
new backend needs nothing beyond a subclass and a registry entry.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from kvbench.context import PhaseContext
from kvbench.config import DEFAULT_IDLE_POOL_SIZE, DEFAULT_WORKER_COUNT


@dataclass
class StoreOptions:
    """Connection settings handed to a store factory.

    Attributes:
        target: Backend connection string (DSN or URL).
        idle_pool_size: Connections kept open while idle.
        max_connections: Upper bound on open connections, normally the worker count.
    """
    target: str = ""
    idle_pool_size: int = DEFAULT_IDLE_POOL_SIZE
    max_connections: int = DEFAULT_WORKER_COUNT


class KeyValueStore(ABC):
    """Abstract interface that all benchmarked backends must implement.

    Contract:
        - ``name`` is static and never fails.
        - ``setup`` is idempotent and runs to completion before any worker starts.
        - ``set`` has upsert semantics and is safe to call from many threads.
        - ``get`` returns ``""`` for a key that was never set.
        - Every call raises ``DeadlineExceeded`` promptly when ``ctx`` is done.

    Example:
        class DictStore(KeyValueStore):
            name = "dict"

            def setup(self, ctx):
                self.data = {}

            def set(self, ctx, key, value):
                ctx.raise_if_done()
                self.data[key] = value

            def get(self, ctx, key):
                ctx.raise_if_done()
                return self.data.get(key, "")
    """

    name: str = ""

    @abstractmethod
    def setup(self, ctx: PhaseContext) -> None:
        """Prepare backend state for a run.

        Raises:
            StoreSetupError: If the backend cannot be prepared.
        """
        pass

    @abstractmethod
    def set(self, ctx: PhaseContext, key: str, value: str) -> None:
        """Insert or overwrite ``key``."""
        pass

    @abstractmethod
    def get(self, ctx: PhaseContext, key: str) -> str:
        """Return the current value of ``key``, ``""`` if absent."""
        pass

    def close(self) -> None:
        """Release client resources. Optional for stores that hold none."""
        pass
