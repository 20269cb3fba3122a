"""Multi-source repair content search."""

from repairhub.services.search.aggregator import SearchAggregator
from repairhub.services.search.cache import SearchCacheStore, SqlSearchCacheStore
from repairhub.services.search.fallback import generate_fallback_results
from repairhub.services.search.scoring import score_relevance
from repairhub.services.search.types import (
    PROVIDER_IDS,
    SearchOutcome,
    SearchQuery,
    SearchResultItem,
    SourceId,
)

__all__ = [
    "SearchAggregator",
    "SearchCacheStore",
    "SqlSearchCacheStore",
    "generate_fallback_results",
    "score_relevance",
    "PROVIDER_IDS",
    "SearchOutcome",
    "SearchQuery",
    "SearchResultItem",
    "SourceId",
]
