"""Custom exception hierarchy for moviecache.

All application exceptions inherit from :class:`MovieCacheError`, which
carries an optional ``provider_name`` so error handlers can identify which
backend (e.g. "sqlite_response_storage", "network") caused the failure.

    MovieCacheError  (base -- catch-all for any moviecache error)
    +-- StorageUnavailableError  (persistent store could not be read/written)
    +-- ConfigurationError       (invalid settings at composition time)
    +-- FetchError               (upstream network fetch failed)

A cache *miss* is deliberately absent from this hierarchy: it is a normal
outcome and is always represented as ``None``.
"""


class MovieCacheError(Exception):
    """Base exception for all moviecache errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets
    for structured log output, e.g. ``[sqlite_response_storage] disk I/O error``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Storage errors
# ---------------------------------------------------------------------------

class StorageUnavailableError(MovieCacheError):
    """Raised when the persistent backing store fails (I/O fault, corrupt record).

    Distinct from a miss: callers can tell "not cached" (``None``) apart
    from "cache unavailable" (this exception).  Repositories treat it like
    a miss for user-visible purposes and log the distinction.
    """

    def __init__(
        self,
        message: str = "Persistent cache storage is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration / upstream errors
# ---------------------------------------------------------------------------

class ConfigurationError(MovieCacheError):
    """Raised when configuration is invalid or missing at composition time."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class FetchError(MovieCacheError):
    """Raised by network service implementations when an upstream fetch fails."""

    def __init__(
        self,
        message: str = "Upstream fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
