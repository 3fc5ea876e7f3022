"""JSON file implementation of ConfigStore.

Keeps all keys in a single JSON object on disk. Suitable for CLI tools and
desktop clients that need the cached resolution to survive restarts
without running a Redis server.
"""

import asyncio
import json
from pathlib import Path

from slotmanager.errors import StorageFailure
from slotmanager.observability.logging import get_logger
from slotmanager.store import ConfigStore

logger = get_logger(__name__)


class JsonFileConfigStore(ConfigStore):
    """ConfigStore persisting a ``{key: value}`` JSON object to one file.

    Writes go to a sibling temporary file and are moved into place, so a
    crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the store.

        Args:
            path: File to read and write. Parent directories are created on
                first write.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("file_store_read_error", path=str(self._path), error=str(e))
            raise StorageFailure(f"Failed to read {self._path}: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise StorageFailure(f"Unexpected content in {self._path}: not a JSON object")
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, values: dict[str, str]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(values, f, indent=2)
            # Atomic replace
            tmp_path.replace(self._path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            logger.error("file_store_write_error", path=str(self._path), error=str(e))
            raise StorageFailure(f"Failed to write {self._path}: {e}", cause=e) from e

    async def get(self, key: str) -> str | None:
        """Get a value by key."""
        values = await asyncio.to_thread(self._read_all)
        return values.get(key)

    async def set(self, key: str, value: str) -> None:
        """Store a value."""

        def _set() -> None:
            values = self._read_all()
            values[key] = value
            self._write_all(values)

        await asyncio.to_thread(_set)

    async def delete(self, key: str) -> None:
        """Delete a value."""

        def _delete() -> None:
            values = self._read_all()
            if values.pop(key, None) is not None:
                self._write_all(values)

        await asyncio.to_thread(_delete)
