"""Data models for base URL resolution.

Wire models for the slot-manager lookup response and the persisted
cache record.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResolutionPolicy(str, Enum):
    """Failure posture of a resolver, selected by the wired collaborators."""

    NON_PERSISTENT = "non_persistent"
    PERSISTENT = "persistent"


class FetchResponse(BaseModel):
    """Status code and parsed JSON body returned by a Fetcher."""

    status_code: int = Field(description="HTTP status code")
    body: Any | None = Field(
        default=None,
        description="Parsed JSON body, or None when the body was not JSON",
    )

    @property
    def ok(self) -> bool:
        """Whether the status code is in the 2xx range."""
        return 200 <= self.status_code < 300


class LookupData(BaseModel):
    """The ``data`` object of a lookup response."""

    model_config = ConfigDict(extra="ignore")

    backend_url_1: str | None = Field(
        default=None,
        description="Backend base URL assigned to the domain",
    )


class LookupResponse(BaseModel):
    """Body of ``GET /api/check-website-active``.

    Only ``status`` and ``data.backend_url_1`` are interpreted; any other
    field the service returns is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    status: Any = Field(default=None, description="Truthy when the domain is active")
    data: LookupData | None = Field(default=None, description="Lookup payload")

    @property
    def backend_url(self) -> str | None:
        """The resolved backend URL, or None if the response is unusable."""
        if not self.status or self.data is None:
            return None
        url = self.data.backend_url_1
        if not isinstance(url, str) or not url.strip():
            return None
        return url


class CachedRecord(BaseModel):
    """Last known good resolution, persisted as JSON text."""

    resolved_url: str = Field(description="Resolved backend base URL")
    domain: str = Field(description="Domain the URL was resolved for")
    fetched_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the remote lookup succeeded",
    )

    @field_validator("resolved_url", "domain")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value
