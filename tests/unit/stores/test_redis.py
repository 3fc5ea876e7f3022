"""Unit tests for RedisConfigStore."""

from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from slotmanager.errors import StorageFailure
from slotmanager.stores import RedisConfigStore


@pytest.fixture
def mock_redis():
    """Create mock Redis client."""
    client = AsyncMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    return client


@pytest.fixture
def store(mock_redis) -> RedisConfigStore:
    """Create Redis config store with mock."""
    return RedisConfigStore(mock_redis)


class TestRedisConfigStoreKeyFormat:
    """Tests for Redis key formatting."""

    def test_default_prefix(self, store: RedisConfigStore) -> None:
        assert store._make_key("slot_manager_config") == "slotmanager:slot_manager_config"

    def test_custom_prefix(self, mock_redis) -> None:
        store = RedisConfigStore(mock_redis, key_prefix="app")
        assert store._make_key("cfg") == "app:cfg"


class TestRedisConfigStoreOperations:
    """Tests for get/set/delete."""

    async def test_get_missing(self, store: RedisConfigStore, mock_redis) -> None:
        assert await store.get("cfg") is None
        mock_redis.get.assert_called_once_with("slotmanager:cfg")

    async def test_get_decodes_bytes(self, store: RedisConfigStore, mock_redis) -> None:
        mock_redis.get.return_value = b'{"a": 1}'
        assert await store.get("cfg") == '{"a": 1}'

    async def test_get_string_value(self, store: RedisConfigStore, mock_redis) -> None:
        mock_redis.get.return_value = "value"
        assert await store.get("cfg") == "value"

    async def test_set_without_expiry(self, store: RedisConfigStore, mock_redis) -> None:
        await store.set("cfg", "value")
        mock_redis.set.assert_called_once_with("slotmanager:cfg", "value")

    async def test_delete(self, store: RedisConfigStore, mock_redis) -> None:
        await store.delete("cfg")
        mock_redis.delete.assert_called_once_with("slotmanager:cfg")


class TestRedisConfigStoreErrors:
    """Redis errors surface as StorageFailure."""

    @pytest.mark.parametrize(
        ("operation", "args"),
        [("get", ("cfg",)), ("set", ("cfg", "value")), ("delete", ("cfg",))],
    )
    async def test_redis_error_wrapped(
        self, store: RedisConfigStore, mock_redis, operation: str, args: tuple
    ) -> None:
        error = redis.ConnectionError("unavailable")
        getattr(mock_redis, operation).side_effect = error

        with pytest.raises(StorageFailure) as exc_info:
            await getattr(store, operation)(*args)

        assert exc_info.value.cause is error

    async def test_undecodable_bytes_wrapped(self, store: RedisConfigStore, mock_redis) -> None:
        mock_redis.get.return_value = b"\xff\xfe\xfa"

        with pytest.raises(StorageFailure) as exc_info:
            await store.get("cfg")

        assert isinstance(exc_info.value.cause, UnicodeDecodeError)
