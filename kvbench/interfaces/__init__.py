"""
Interface definitions for kvbench.

Available Interfaces:
    - KeyValueStore: Contract every benchmarked backend implements
    - StoreOptions: Connection settings passed to store factories
"""

from kvbench.interfaces.store import KeyValueStore, StoreOptions

__all__ = [
    'KeyValueStore',
    'StoreOptions',
]
