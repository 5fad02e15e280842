import psycopg

from psycopg_pool import ConnectionPool

from kvbench.context import PhaseContext
from kvbench.errors import StoreSetupError
from kvbench.interfaces.store import KeyValueStore, StoreOptions
from kvbench.stores.base import guarded_call

SETUP_TIMEOUT_SECONDS = 30.0

DROP_TABLE_SQL = "drop table if exists kv"
CREATE_TABLE_SQL = "create unlogged table kv(k varchar primary key, v varchar)"
UPSERT_SQL = "insert into kv(k, v) values (%s, %s) on conflict (k) do update set v = excluded.v"
SELECT_SQL = "select v from kv where k = %s"


class PostgresStore(KeyValueStore):
    """PostgreSQL backend using a psycopg connection pool.

    The table is unlogged: the benchmark measures the request path, not WAL
    durability. The pool keeps ``idle_pool_size`` connections open and grows
    up to one connection per worker.
    """

    name = "postgresql"

    def __init__(self, target: str, idle_pool_size: int, max_connections: int):
        self.target = target
        max_size = max(1, idle_pool_size, max_connections)
        self.pool = ConnectionPool(
            target,
            min_size=min(idle_pool_size, max_size),
            max_size=max_size,
            open=False,
            name="kvbench",
        )

    @classmethod
    def from_options(cls, options: StoreOptions) -> "PostgresStore":
        return cls(options.target, options.idle_pool_size, options.max_connections)

    def setup(self, ctx: PhaseContext) -> None:
        ctx.raise_if_done()
        timeout = ctx.remaining() or SETUP_TIMEOUT_SECONDS
        try:
            self.pool.open(wait=True, timeout=timeout)
            with self.pool.connection(timeout=timeout) as conn:
                conn.execute(DROP_TABLE_SQL)
                conn.execute(CREATE_TABLE_SQL)
        except psycopg.Error as e:
            raise StoreSetupError(
                f"Failed to prepare table kv: {e}",
                backend=self.name,
            ) from e

    def set(self, ctx: PhaseContext, key: str, value: str) -> None:
        with guarded_call(ctx, self.name, "set", key):
            with self.pool.connection(timeout=ctx.remaining()) as conn:
                conn.execute(UPSERT_SQL, (key, value))

    def get(self, ctx: PhaseContext, key: str) -> str:
        with guarded_call(ctx, self.name, "get", key):
            with self.pool.connection(timeout=ctx.remaining()) as conn:
                row = conn.execute(SELECT_SQL, (key,)).fetchone()
        if row is None or row[0] is None:
            return ""
        return row[0]

    def close(self) -> None:
        self.pool.close()
