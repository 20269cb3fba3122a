"""SQLAlchemy models package."""

from repairhub.models.search_cache import SearchCacheEntry

__all__ = [
    "SearchCacheEntry",
]
