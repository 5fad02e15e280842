"""
Store registry for selecting a backend by name at startup.

This module provides the StoreRegistry class that enables:
- Registration of backend factories under a stable name
- CLI choices built from whatever is registered
- Swapping backends through configuration only
"""

from typing import Dict, Callable, List, Any

from kvbench.interfaces.store import KeyValueStore, StoreOptions


class StoreRegistry:
    """Registry for key-value store backends.

    Usage:
        # Register a backend
        StoreRegistry.register(
            name='redis',
            factory=RedisStore.from_options,
            description='Redis via redis-py'
        )

        # Build a store from configuration
        store = StoreRegistry.create('redis', StoreOptions(target='redis://localhost:6379/0'))
    """

    _factories: Dict[str, Callable[[StoreOptions], KeyValueStore]] = {}
    _descriptions: Dict[str, str] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[[StoreOptions], KeyValueStore],
                 description: str = "") -> None:
        """Register a backend factory.

        Args:
            name: Unique backend name (e.g., 'postgresql').
            factory: Callable taking StoreOptions and returning a KeyValueStore.
            description: One-line description shown by ``kvbench backends``.
        """
        cls._factories[name] = factory
        if description:
            cls._descriptions[name] = description

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._factories.pop(name, None)
        cls._descriptions.pop(name, None)

    @classmethod
    def get_factory(cls, name: str) -> Callable[[StoreOptions], KeyValueStore]:
        """Get a backend factory by name.

        Raises:
            ValueError: If the backend is not registered.
        """
        if name not in cls._factories:
            raise ValueError(f"Unknown backend: {name}. "
                             f"Available backends: {list(cls._factories.keys())}")
        return cls._factories[name]

    @classmethod
    def create(cls, name: str, options: StoreOptions) -> KeyValueStore:
        return cls.get_factory(name)(options)

    @classmethod
    def get_all_names(cls) -> List[str]:
        return list(cls._factories.keys())

    @classmethod
    def get_description(cls, name: str) -> str:
        return cls._descriptions.get(name, "")

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._factories

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Useful for testing."""
        cls._factories.clear()
        cls._descriptions.clear()

    @classmethod
    def get_registry_info(cls) -> Dict[str, Any]:
        return {
            name: {
                'factory': getattr(factory, '__qualname__', repr(factory)),
                'description': cls._descriptions.get(name, ""),
            }
            for name, factory in cls._factories.items()
        }
