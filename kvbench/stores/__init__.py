"""
Key-value store backends for kvbench.

This module exports the backend classes and registers them with the
StoreRegistry so the CLI can offer them by name.
"""

from kvbench.config import BACKEND_TYPES
from kvbench.registry import StoreRegistry
from kvbench.stores.memory import MemoryStore
from kvbench.stores.postgres import PostgresStore
from kvbench.stores.redis_store import RedisStore


def register_stores():
    """Register all built-in backends with the StoreRegistry.

    Called at module import time so the CLI can build its choices.
    """
    StoreRegistry.register(
        name=BACKEND_TYPES.postgresql.value,
        factory=PostgresStore.from_options,
        description="PostgreSQL unlogged table via psycopg (upsert on primary key)"
    )

    StoreRegistry.register(
        name=BACKEND_TYPES.redis.value,
        factory=RedisStore.from_options,
        description="Redis SET/GET via redis-py, no expiration"
    )

    StoreRegistry.register(
        name=BACKEND_TYPES.memory.value,
        factory=MemoryStore.from_options,
        description="In-process dict, exercises the harness without a server"
    )


register_stores()

__all__ = [
    'MemoryStore',
    'PostgresStore',
    'RedisStore',
    'register_stores',
]
