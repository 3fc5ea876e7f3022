"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["none", "inmemory", "redis", "file"]


class StorageConfig(BaseModel):
    """Persistence for the cached resolution.

    ``none`` selects the non-persistent policy; every other backend
    enables the persistent fallback.
    """

    backend: BackendType = Field(
        default="none",
        description="Backend type",
    )
    connection_url: str | None = Field(
        default=None,
        description="Redis connection URL (from env var)",
    )
    key_prefix: str = Field(
        default="slotmanager",
        description="Redis key prefix",
    )
    file_path: str = Field(
        default=".slotmanager/cache.json",
        description="Cache file for the file backend",
    )
