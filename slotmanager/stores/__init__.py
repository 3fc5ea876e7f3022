"""Persistence backends for the cached resolution."""

from slotmanager.store import ConfigStore
from slotmanager.stores.file import JsonFileConfigStore
from slotmanager.stores.inmemory import InMemoryConfigStore
from slotmanager.stores.redis import RedisConfigStore

__all__ = [
    "ConfigStore",
    "InMemoryConfigStore",
    "JsonFileConfigStore",
    "RedisConfigStore",
]
