"""Backend base URL resolution via the slot-manager lookup service.

Usage:
    from slotmanager import create_config_resolver

    resolver = create_config_resolver(domain="com.yourdomain")
    await resolver.initialize()
    base_url = resolver.get_base_url()
"""

from slotmanager.errors import (
    ConfigurationError,
    ResolutionError,
    SlotManagerError,
    StorageFailure,
    TransportFailure,
)
from slotmanager.factory import create_resolver_from_settings
from slotmanager.fetcher import Fetcher, HttpxFetcher
from slotmanager.models import CachedRecord, FetchResponse, ResolutionPolicy
from slotmanager.resolver import ConfigResolver, create_config_resolver
from slotmanager.store import ConfigStore

__all__ = [
    "CachedRecord",
    "ConfigResolver",
    "ConfigStore",
    "ConfigurationError",
    "FetchResponse",
    "Fetcher",
    "HttpxFetcher",
    "ResolutionError",
    "ResolutionPolicy",
    "SlotManagerError",
    "StorageFailure",
    "TransportFailure",
    "create_config_resolver",
    "create_resolver_from_settings",
]
