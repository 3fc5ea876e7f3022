"""Error hierarchy for base URL resolution.

Collaborator failures (transport, storage) are raised by Fetcher and
ConfigStore implementations. ConfigResolver never lets them escape raw:
they are either wrapped in a ResolutionError or treated as a cache miss.
"""


class SlotManagerError(Exception):
    """Base exception for all slotmanager errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(SlotManagerError):
    """Raised when a resolver is constructed with invalid options.

    Examples:
        - Missing or empty domain
        - Empty lookup endpoint
        - Redis storage selected without a connection URL
    """

    pass


class ResolutionError(SlotManagerError):
    """Raised when no usable base URL could be resolved.

    The underlying cause (transport failure, HTTP status or invalid body)
    is available as ``cause`` and as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        domain: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.domain = domain


class TransportFailure(SlotManagerError):
    """Raised by a Fetcher when the request could not be completed.

    Examples:
        - DNS resolution or connection failure
        - Read timeout
        - Response that is not a valid HTTP exchange
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class StorageFailure(SlotManagerError):
    """Raised by a ConfigStore when the backend fails.

    Examples:
        - Redis server unavailable
        - Unreadable or corrupt cache file
    """

    pass
