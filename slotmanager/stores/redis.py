"""Redis implementation of ConfigStore."""

import redis.asyncio as redis

from slotmanager.errors import StorageFailure
from slotmanager.observability.logging import get_logger
from slotmanager.store import ConfigStore

logger = get_logger(__name__)


class RedisConfigStore(ConfigStore):
    """Redis-backed ConfigStore.

    Key format: {prefix}:{key}
    Values are stored without expiry.
    """

    def __init__(self, client: redis.Redis, key_prefix: str = "slotmanager") -> None:
        """Initialize Redis config store.

        Args:
            client: Redis client instance
            key_prefix: Prefix for Redis keys
        """
        self._client = client
        self._key_prefix = key_prefix

    def _make_key(self, key: str) -> str:
        """Build Redis key."""
        return f"{self._key_prefix}:{key}"

    async def get(self, key: str) -> str | None:
        """Get a value by key."""
        try:
            value = await self._client.get(self._make_key(key))
        except redis.RedisError as e:
            logger.error("redis_get_error", key=key, error=str(e))
            raise StorageFailure(f"Failed to read {key}: {e}", cause=e) from e

        if value is None or isinstance(value, str):
            return value
        try:
            return value.decode()
        except UnicodeDecodeError as e:
            logger.error("redis_decode_error", key=key, error=str(e))
            raise StorageFailure(f"Failed to decode {key}: {e}", cause=e) from e

    async def set(self, key: str, value: str) -> None:
        """Store a value."""
        try:
            await self._client.set(self._make_key(key), value)
        except redis.RedisError as e:
            logger.error("redis_set_error", key=key, error=str(e))
            raise StorageFailure(f"Failed to write {key}: {e}", cause=e) from e

    async def delete(self, key: str) -> None:
        """Delete a value."""
        try:
            await self._client.delete(self._make_key(key))
        except redis.RedisError as e:
            logger.error("redis_delete_error", key=key, error=str(e))
            raise StorageFailure(f"Failed to delete {key}: {e}", cause=e) from e
