"""Search error taxonomy.

    SearchError (base)
    ├── InvalidQuery           -> 400, never retried
    ├── ProviderFailure        -> swallowed per adapter, never surfaced
    ├── CacheWriteFailure      -> swallowed by the aggregator, never surfaced
    └── ConfigurationFailure   -> 500
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for search aggregation errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidQuery(SearchError):
    """Raised when the query is missing or shorter than the minimum length."""

    status_code = 400


class ProviderFailure(SearchError):
    """Raised inside a source adapter on network, status or payload errors."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class CacheWriteFailure(SearchError):
    """Raised when persisting a fresh result set to the cache fails."""


class ConfigurationFailure(SearchError):
    """Raised when required backend connection settings are absent."""

    status_code = 500
