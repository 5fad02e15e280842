"""
Tests for StoreRegistry in kvbench.registry.

Tests cover:
- Registration and lookup
- Unknown backend errors
- Built-in backend registration
"""

import pytest

from kvbench.interfaces.store import StoreOptions
from kvbench.registry import StoreRegistry
from kvbench.stores import MemoryStore, register_stores


@pytest.fixture
def clean_registry():
    """Empty the registry for a test and restore the built-in backends afterwards."""
    StoreRegistry.clear()
    yield StoreRegistry
    StoreRegistry.clear()
    register_stores()


class TestStoreRegistry:
    """Tests for StoreRegistry class methods."""

    def test_register_and_create(self, clean_registry):
        clean_registry.register("dict", MemoryStore.from_options, description="test store")

        store = clean_registry.create("dict", StoreOptions())

        assert isinstance(store, MemoryStore)
        assert clean_registry.is_registered("dict")
        assert clean_registry.get_description("dict") == "test store"

    def test_unknown_backend_raises_value_error(self, clean_registry):
        clean_registry.register("dict", MemoryStore.from_options)

        with pytest.raises(ValueError) as exc_info:
            clean_registry.get_factory("etcd")

        assert "Unknown backend: etcd" in str(exc_info.value)
        assert "dict" in str(exc_info.value)

    def test_unregister(self, clean_registry):
        clean_registry.register("dict", MemoryStore.from_options, description="x")
        clean_registry.unregister("dict")

        assert not clean_registry.is_registered("dict")
        assert clean_registry.get_description("dict") == ""

    def test_unregister_missing_is_noop(self, clean_registry):
        clean_registry.unregister("never-registered")

    def test_registry_info(self, clean_registry):
        clean_registry.register("dict", MemoryStore.from_options, description="in memory")

        info = clean_registry.get_registry_info()

        assert info == {
            "dict": {
                "factory": "MemoryStore.from_options",
                "description": "in memory",
            }
        }


class TestBuiltinBackends:
    """The stores package registers its backends at import time."""

    def test_builtin_names(self):
        names = StoreRegistry.get_all_names()
        assert {"postgresql", "redis", "memory"} <= set(names)

    def test_builtin_descriptions(self):
        for name in ("postgresql", "redis", "memory"):
            assert StoreRegistry.get_description(name)

    def test_create_memory(self):
        store = StoreRegistry.create("memory", StoreOptions())
        assert store.name == "memory"
