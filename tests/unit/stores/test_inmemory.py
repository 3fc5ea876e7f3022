"""Tests for InMemoryConfigStore."""

import pytest

from slotmanager.stores import InMemoryConfigStore


@pytest.fixture
def store() -> InMemoryConfigStore:
    """Create a fresh store for each test."""
    return InMemoryConfigStore()


class TestInMemoryConfigStore:
    """Tests for get/set/delete."""

    async def test_get_missing_returns_none(self, store: InMemoryConfigStore) -> None:
        assert await store.get("missing") is None

    async def test_set_then_get(self, store: InMemoryConfigStore) -> None:
        await store.set("key", "value")
        assert await store.get("key") == "value"

    async def test_set_overwrites(self, store: InMemoryConfigStore) -> None:
        await store.set("key", "first")
        await store.set("key", "second")
        assert await store.get("key") == "second"

    async def test_delete(self, store: InMemoryConfigStore) -> None:
        await store.set("key", "value")
        await store.delete("key")
        assert await store.get("key") is None

    async def test_delete_missing_is_noop(self, store: InMemoryConfigStore) -> None:
        await store.delete("missing")

    async def test_initial_values(self) -> None:
        store = InMemoryConfigStore({"key": "value"})
        assert await store.get("key") == "value"

    async def test_clear(self, store: InMemoryConfigStore) -> None:
        await store.set("key", "value")
        store.clear()
        assert await store.get("key") is None
