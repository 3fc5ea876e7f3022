"""In-memory implementation of ConfigStore."""

from slotmanager.store import ConfigStore


class InMemoryConfigStore(ConfigStore):
    """In-memory implementation of ConfigStore for testing and development.

    Values live for the lifetime of the instance only.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Initialize storage, optionally pre-populated."""
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        """Get a value by key."""
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        """Store a value."""
        self._values[key] = value

    async def delete(self, key: str) -> None:
        """Delete a value."""
        self._values.pop(key, None)

    def clear(self) -> None:
        """Clear all values (test utility)."""
        self._values.clear()
