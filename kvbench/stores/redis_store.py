import redis

from kvbench.config import DRAIN_GRACE_SECONDS
from kvbench.context import PhaseContext
from kvbench.interfaces.store import KeyValueStore, StoreOptions
from kvbench.stores.base import guarded_call


class RedisStore(KeyValueStore):
    """Redis backend using redis-py with a shared connection pool.

    Keys are written without expiration. A missing key reads back as ``""``.
    """

    name = "redis"

    def __init__(self, target: str, idle_pool_size: int, max_connections: int):
        self.target = target
        self.pool = redis.ConnectionPool.from_url(
            target,
            max_connections=max(1, idle_pool_size, max_connections),
            decode_responses=True,
            # Bounds a call left running past the deadline to the drain grace
            socket_timeout=DRAIN_GRACE_SECONDS,
            socket_connect_timeout=DRAIN_GRACE_SECONDS,
        )
        self.client = redis.Redis(connection_pool=self.pool)

    @classmethod
    def from_options(cls, options: StoreOptions) -> "RedisStore":
        return cls(options.target, options.idle_pool_size, options.max_connections)

    def setup(self, ctx: PhaseContext) -> None:
        # Nothing to create: keys are overwritten by the write phase.
        ctx.raise_if_done()

    def set(self, ctx: PhaseContext, key: str, value: str) -> None:
        with guarded_call(ctx, self.name, "set", key):
            self.client.set(key, value)

    def get(self, ctx: PhaseContext, key: str) -> str:
        with guarded_call(ctx, self.name, "get", key):
            value = self.client.get(key)
        return "" if value is None else value

    def close(self) -> None:
        self.pool.disconnect()
