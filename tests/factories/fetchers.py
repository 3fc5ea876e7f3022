"""Scripted Fetcher for resolver tests."""

from collections.abc import Mapping
from typing import Any

from slotmanager.errors import TransportFailure
from slotmanager.fetcher import Fetcher
from slotmanager.models import FetchResponse


def lookup_body(backend_url: str | None, status: Any = True) -> dict[str, Any]:
    """Build a slot-manager lookup response body."""
    return {"status": status, "data": {"backend_url_1": backend_url}}


class FakeFetcher(Fetcher):
    """Fetcher that replays queued outcomes in order.

    Each outcome is a FetchResponse, a JSON body (returned with status 200)
    or an exception instance to raise. The last outcome repeats once the
    queue is exhausted.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes: list[Any] = list(outcomes)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def respond(self, *outcomes: Any) -> None:
        """Replace the queued outcomes."""
        self.outcomes = list(outcomes)

    def fail(self, message: str = "connection refused") -> None:
        """Make every following request fail at the transport level."""
        self.outcomes = [TransportFailure(message)]

    async def get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> FetchResponse:
        self.calls.append({"url": url, "params": dict(params or {}), "headers": headers})
        if not self.outcomes:
            raise AssertionError("FakeFetcher has no outcome queued")

        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, FetchResponse):
            return outcome
        return FetchResponse(status_code=200, body=outcome)

    async def close(self) -> None:
        self.closed = True
