"""Shared test doubles for the search pipeline."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import UTC, datetime

import pytest

from repairhub.core.exceptions import CacheWriteFailure
from repairhub.services.search.cache import SearchCacheStore
from repairhub.services.search.sources.base import SourceAdapter
from repairhub.services.search.types import SearchResultItem

FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


class FakeCacheStore(SearchCacheStore):
    """In-memory cache store with the same read/write semantics as the SQL one."""

    def __init__(self, *, fail_writes: bool = False) -> None:
        self.rows: list[tuple[str, SearchResultItem, datetime]] = []
        self.fail_writes = fail_writes
        self.lookups: list[str] = []
        self.inserts: list[tuple[str, int, datetime]] = []

    async def lookup(self, normalized_query: str, now: datetime) -> list[SearchResultItem]:
        self.lookups.append(normalized_query)
        live = [item for q, item, until in self.rows if q == normalized_query and until > now]
        return sorted(live, key=lambda i: i.relevance_score, reverse=True)

    async def insert(
        self,
        normalized_query: str,
        items: Sequence[SearchResultItem],
        cached_until: datetime,
    ) -> None:
        if self.fail_writes:
            raise CacheWriteFailure("database unavailable")
        self.inserts.append((normalized_query, len(items), cached_until))
        self.rows.extend((normalized_query, item, cached_until) for item in items)


class StubAdapter(SourceAdapter):
    """Adapter returning canned items, raising, or hanging on demand."""

    def __init__(
        self,
        source_id: str,
        items: Sequence[SearchResultItem] = (),
        *,
        error: Exception | None = None,
        delay: float = 0.0,
        timeout_seconds: float = 1.0,
    ) -> None:
        super().__init__(timeout_seconds=timeout_seconds)
        self.source_id = source_id
        self.items = list(items)
        self.error = error
        self.delay = delay
        self.queries: list[str] = []

    async def search(self, query: str) -> list[SearchResultItem]:
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.items)


def make_item(
    title: str,
    source_name: str = "guide-source",
    url: str | None = None,
    score: int = 0,
) -> SearchResultItem:
    return SearchResultItem(
        title=title,
        source_url=url or f"https://example.com/{title.replace(' ', '-').lower()}",
        source_name=source_name,
        relevance_score=score,
    )


@pytest.fixture
def cache_store() -> FakeCacheStore:
    return FakeCacheStore()
