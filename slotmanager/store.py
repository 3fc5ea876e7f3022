"""ConfigStore abstract interface."""

from abc import ABC, abstractmethod


class ConfigStore(ABC):
    """Abstract interface for persisting the cached resolution.

    A string key/value store. Implementations must wrap backend-specific
    errors in StorageFailure.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get the value stored under key, or None."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete key. Deleting a missing key is not an error."""
        pass
