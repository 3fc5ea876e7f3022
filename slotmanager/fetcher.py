"""HTTP fetcher used for the slot-manager lookup.

Usage:
    from slotmanager.fetcher import HttpxFetcher

    async with HttpxFetcher(headers={"User-Agent": "my-app/1.0"}) as fetcher:
        response = await fetcher.get("https://example.com/api/ping")
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import httpx

from slotmanager.errors import TransportFailure
from slotmanager.models import FetchResponse
from slotmanager.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


class Fetcher(ABC):
    """Abstract interface for issuing GET requests that return JSON.

    Implementations return non-2xx responses as a FetchResponse and raise
    TransportFailure only when no response was obtained.
    """

    @abstractmethod
    async def get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> FetchResponse:
        """Issue a GET request and return the status and parsed body."""
        pass

    async def close(self) -> None:
        """Release transport resources."""
        return None


class HttpxFetcher(Fetcher):
    """Fetcher backed by ``httpx.AsyncClient``.

    Attributes:
        headers: Default headers sent with every request
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: Existing client to use. It is not closed by close().
            timeout: Request timeout in seconds for an owned client
            headers: Default headers merged into every request
        """
        self.headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "HttpxFetcher":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()

    async def get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> FetchResponse:
        """Issue a GET request.

        Raises:
            TransportFailure: If the request could not be completed
        """
        try:
            response = await self._client.get(
                url,
                params=dict(params) if params else None,
                headers={**self.headers, **(headers or {})},
            )
        except httpx.HTTPError as e:
            logger.warning("fetch_transport_error", url=url, error=str(e))
            raise TransportFailure(f"GET {url} failed: {e}", cause=e) from e

        try:
            body = response.json()
        except ValueError:
            logger.debug(
                "fetch_body_not_json",
                url=url,
                status_code=response.status_code,
            )
            body = None

        return FetchResponse(status_code=response.status_code, body=body)
