"""Backend base URL resolution against the slot-manager service.

A ConfigResolver is bound to one domain. It asks the slot-manager which
backend serves that domain and, when a ConfigStore is wired in, keeps the
last good answer as a fallback for when the service is unreachable.

Usage:
    from slotmanager import create_config_resolver
    from slotmanager.stores import InMemoryConfigStore

    resolver = create_config_resolver(domain="com.example", store=InMemoryConfigStore())
    await resolver.initialize()
    base_url = resolver.get_base_url()
"""

import asyncio
from typing import Any

from pydantic import ValidationError

from slotmanager.config.settings import DEFAULT_LOOKUP_ENDPOINT, DEFAULT_PERSISTENCE_KEY
from slotmanager.errors import (
    ConfigurationError,
    ResolutionError,
    StorageFailure,
    TransportFailure,
)
from slotmanager.fetcher import Fetcher, HttpxFetcher
from slotmanager.models import CachedRecord, LookupResponse, ResolutionPolicy
from slotmanager.observability.logging import get_logger
from slotmanager.observability.metrics import (
    record_lookup,
    record_stale_fallback,
    record_storage_failure,
)
from slotmanager.store import ConfigStore

logger = get_logger(__name__)

LOOKUP_PATH = "/api/check-website-active"


class ConfigResolver:
    """Resolves and holds the backend base URL for one domain.

    Two failure postures, chosen by whether a store is given:

    - NON_PERSISTENT: every value served was verified by a lookup made by
      this instance. Lookup failures raise ResolutionError.
    - PERSISTENT: a previously persisted URL is served when the lookup
      fails, and errors are raised only when nothing has ever resolved.

    initialize(), refresh_config() and clear_config() are serialized per
    instance. Queries never wait.
    """

    def __init__(
        self,
        domain: str | None = None,
        *,
        lookup_endpoint: str | None = None,
        persistence_key: str | None = None,
        fetcher: Fetcher | None = None,
        store: ConfigStore | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the resolver. Performs no I/O.

        Args:
            domain: Application domain, e.g. "com.yourdomain"
            lookup_endpoint: Slot-manager base URL (trailing "/" is ignored)
            persistence_key: Store key for the cached resolution
            fetcher: HTTP fetcher; an HttpxFetcher is created on first use
            store: Enables the persistent policy when given
            timeout: Request timeout for the default fetcher, in seconds

        Raises:
            ConfigurationError: If domain or lookup_endpoint is empty
        """
        if not isinstance(domain, str) or not domain.strip():
            raise ConfigurationError("missing domain")

        endpoint = DEFAULT_LOOKUP_ENDPOINT if lookup_endpoint is None else lookup_endpoint
        endpoint = endpoint.strip().rstrip("/")
        if not endpoint:
            raise ConfigurationError("missing lookup endpoint")

        self._domain = domain
        self._lookup_endpoint = endpoint
        self._persistence_key = persistence_key or DEFAULT_PERSISTENCE_KEY
        self._fetcher = fetcher
        self._owns_fetcher = fetcher is None
        self._store = store
        self._timeout = timeout

        self._resolved_url: str | None = None
        self._loaded = False
        self._lock = asyncio.Lock()
        self._log = logger.bind(domain=domain)

    # Properties

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def lookup_endpoint(self) -> str:
        return self._lookup_endpoint

    @property
    def persistence_key(self) -> str:
        return self._persistence_key

    @property
    def policy(self) -> ResolutionPolicy:
        if self._store is None:
            return ResolutionPolicy.NON_PERSISTENT
        return ResolutionPolicy.PERSISTENT

    # Queries

    def get_base_url(self) -> str | None:
        """Get the resolved base URL, or None until one is loaded."""
        if not self._loaded or not self._resolved_url:
            return None
        return self._resolved_url

    def is_config_loaded(self) -> bool:
        """Whether a base URL is loaded and usable."""
        return self._loaded

    def get_domain(self) -> str:
        """Get the domain this resolver is bound to."""
        return self._domain

    def url_for(self, path: str) -> str | None:
        """Join the base URL and an API path, or None until loaded.

        Example:
            resolver.url_for("/v1/orders") -> "https://api.example.com/v1/orders"
        """
        base_url = self.get_base_url()
        if base_url is None:
            return None
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"

    # Commands

    async def initialize(self) -> None:
        """Resolve the base URL. Call once, early in the host's startup.

        Under the persistent policy the cached value is loaded first and
        then always re-checked against the service.

        Raises:
            ResolutionError: If the lookup failed and no cached value exists
                (or, under the non-persistent policy, if the lookup failed)
        """
        async with self._lock:
            if self._store is None:
                self._apply(await self._lookup())
                return

            cached_url = await self._load_cached(self._store)
            if cached_url is not None:
                self._apply(cached_url)
                self._log.info("config_cache_loaded", base_url=cached_url)

            try:
                resolved_url = await self._lookup()
            except ResolutionError as e:
                if cached_url is None:
                    raise
                record_stale_fallback("initialize")
                self._log.warning(
                    "config_lookup_failed_serving_cached",
                    base_url=cached_url,
                    error=str(e),
                )
                return

            self._apply(resolved_url)
            await self._persist(resolved_url)

    async def refresh_config(self) -> None:
        """Re-run the remote lookup. The cache is never read.

        A failed refresh never unloads a previously resolved URL.

        Raises:
            ResolutionError: Under the non-persistent policy only
        """
        async with self._lock:
            try:
                resolved_url = await self._lookup()
            except ResolutionError as e:
                if self._store is None:
                    raise
                if self._loaded:
                    record_stale_fallback("refresh")
                self._log.warning(
                    "config_refresh_failed",
                    keeping=self._resolved_url if self._loaded else None,
                    error=str(e),
                )
                return

            self._apply(resolved_url)
            await self._persist(resolved_url)

    async def clear_config(self) -> None:
        """Reset to the unloaded state and delete the persisted record."""
        async with self._lock:
            self._resolved_url = None
            self._loaded = False

            if self._store is not None:
                try:
                    await self._store.delete(self._persistence_key)
                except StorageFailure as e:
                    record_storage_failure("delete")
                    self._log.warning("config_cache_delete_failed", error=str(e))

            self._log.info("config_cleared")

    async def close(self) -> None:
        """Close the default fetcher if this resolver created it."""
        if self._owns_fetcher and self._fetcher is not None:
            await self._fetcher.close()
            self._fetcher = None

    async def __aenter__(self) -> "ConfigResolver":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # Internals

    def _get_fetcher(self) -> Fetcher:
        if self._fetcher is None:
            self._fetcher = HttpxFetcher(timeout=self._timeout)
        return self._fetcher

    def _apply(self, url: str) -> None:
        self._resolved_url = url
        self._loaded = True

    async def _lookup(self) -> str:
        """Ask the slot-manager for the domain's backend URL.

        Raises:
            ResolutionError: On transport failure, non-2xx status or a body
                without a truthy ``status`` and ``data.backend_url_1``
        """
        url = f"{self._lookup_endpoint}{LOOKUP_PATH}"
        try:
            response = await self._get_fetcher().get(url, params={"domain": self._domain})
        except TransportFailure as e:
            record_lookup("transport_error")
            self._log.warning("config_lookup_transport_error", error=e.message)
            raise ResolutionError(
                f"Config fetch failed for domain {self._domain}: {e.message}",
                domain=self._domain,
                cause=e,
            ) from e

        if not response.ok:
            record_lookup("http_error")
            self._log.warning("config_lookup_http_error", status_code=response.status_code)
            failure = TransportFailure(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )
            raise ResolutionError(
                f"Config fetch failed: {response.status_code}",
                domain=self._domain,
                cause=failure,
            ) from failure

        try:
            resolved_url = LookupResponse.model_validate(response.body).backend_url
        except ValidationError as e:
            record_lookup("invalid_body")
            self._log.warning("config_lookup_invalid_body", error=str(e))
            raise ResolutionError(
                f"Invalid config response for domain {self._domain}",
                domain=self._domain,
                cause=e,
            ) from e

        if resolved_url is None:
            record_lookup("invalid_body")
            self._log.warning("config_lookup_missing_backend_url")
            raise ResolutionError(
                f"Invalid config response: backend_url_1 not found for domain {self._domain}",
                domain=self._domain,
            )

        record_lookup("success")
        self._log.info("config_lookup_succeeded", base_url=resolved_url)
        return resolved_url

    async def _load_cached(self, store: ConfigStore) -> str | None:
        """Read the persisted record. Any failure counts as a cache miss."""
        try:
            raw = await store.get(self._persistence_key)
        except StorageFailure as e:
            record_storage_failure("get")
            self._log.warning("config_cache_read_failed", error=str(e))
            return None

        if raw is None:
            return None

        try:
            record = CachedRecord.model_validate_json(raw)
        except ValidationError as e:
            self._log.warning("config_cache_malformed", error=str(e))
            return None

        if record.domain != self._domain:
            self._log.warning("config_cache_domain_mismatch", cached_domain=record.domain)
            return None

        return record.resolved_url

    async def _persist(self, url: str) -> None:
        """Write the cached record. A storage failure is logged, not raised."""
        if self._store is None:
            return
        record = CachedRecord(resolved_url=url, domain=self._domain)
        try:
            await self._store.set(self._persistence_key, record.model_dump_json())
        except StorageFailure as e:
            record_storage_failure("set")
            self._log.warning("config_cache_write_failed", error=str(e))


def create_config_resolver(
    domain: str | None = None,
    *,
    lookup_endpoint: str | None = None,
    persistence_key: str | None = None,
    fetcher: Fetcher | None = None,
    store: ConfigStore | None = None,
    timeout: float = 30.0,
) -> ConfigResolver:
    """Create a new ConfigResolver.

    Args:
        domain: Your app domain (e.g., "com.gohuntersalesrep")
        lookup_endpoint: Slot-manager URL (default: DEFAULT_LOOKUP_ENDPOINT)
        persistence_key: Store key (default: DEFAULT_PERSISTENCE_KEY)
        fetcher: HTTP fetcher (default: HttpxFetcher)
        store: Optional persistence; enables the cached fallback
        timeout: Request timeout for the default fetcher, in seconds

    Raises:
        ConfigurationError: If domain is missing
    """
    return ConfigResolver(
        domain,
        lookup_endpoint=lookup_endpoint,
        persistence_key=persistence_key,
        fetcher=fetcher,
        store=store,
        timeout=timeout,
    )
