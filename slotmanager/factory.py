"""Build a wired ConfigResolver from settings.

The composition point for hosts that configure the resolver through
config/*.toml and SLOTMANAGER_* environment variables rather than by
constructing collaborators by hand.
"""

import redis.asyncio as redis

from slotmanager.config import get_settings
from slotmanager.config.settings import Settings
from slotmanager.errors import ConfigurationError
from slotmanager.fetcher import Fetcher
from slotmanager.observability.logging import get_logger, setup_logging
from slotmanager.observability.metrics import set_metrics_enabled
from slotmanager.resolver import ConfigResolver
from slotmanager.store import ConfigStore
from slotmanager.stores import InMemoryConfigStore, JsonFileConfigStore, RedisConfigStore

logger = get_logger(__name__)


def create_store(
    settings: Settings,
    redis_client: redis.Redis | None = None,
) -> ConfigStore | None:
    """Create the configured store, or None for the non-persistent policy.

    Raises:
        ConfigurationError: If the redis backend has no client or URL
    """
    storage = settings.storage

    if storage.backend == "none":
        return None
    if storage.backend == "inmemory":
        return InMemoryConfigStore()
    if storage.backend == "file":
        return JsonFileConfigStore(storage.file_path)

    if redis_client is None:
        if not storage.connection_url:
            raise ConfigurationError(
                "storage.connection_url is required for the redis backend"
            )
        redis_client = redis.from_url(storage.connection_url, decode_responses=True)
        logger.info(
            "redis_client_created",
            url=storage.connection_url.split("@")[-1],  # Log without credentials
        )
    return RedisConfigStore(redis_client, key_prefix=storage.key_prefix)


def configure_observability(settings: Settings) -> None:
    """Apply logging and metrics settings process-wide."""
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_secrets=log_config.redact_secrets,
    )
    set_metrics_enabled(settings.observability.metrics.enabled)


def create_resolver_from_settings(
    domain: str,
    settings: Settings | None = None,
    *,
    fetcher: Fetcher | None = None,
    redis_client: redis.Redis | None = None,
) -> ConfigResolver:
    """Create a ConfigResolver wired according to settings.

    Args:
        domain: Application domain to resolve
        settings: Settings to use (default: get_settings())
        fetcher: Fetcher override; otherwise the resolver creates and owns
            an HttpxFetcher using settings.request_timeout
        redis_client: Existing Redis client for the redis backend

    Raises:
        ConfigurationError: If domain is missing or storage is misconfigured
    """
    settings = settings or get_settings()
    store = create_store(settings, redis_client=redis_client)

    resolver = ConfigResolver(
        domain,
        lookup_endpoint=settings.lookup_endpoint,
        persistence_key=settings.persistence_key,
        fetcher=fetcher,
        store=store,
        timeout=settings.request_timeout,
    )
    logger.debug(
        "resolver_created",
        domain=domain,
        policy=resolver.policy.value,
        storage_backend=settings.storage.backend,
    )
    return resolver
