"""Search aggregator — cache lookup, provider fan-out, scoring, write-back.

Steps for one call:
1) Validate the query (InvalidQuery before any I/O)
2) Cache lookup on the normalized query; a hit short-circuits all network
   access and is only filtered down to the requested sources
3) On a miss, run the requested adapters concurrently, each isolated
4) Concatenate in adapter order; fall back to placeholders if empty
5) Score every item and stable-sort descending
6) Best-effort bulk write-back with a fixed TTL
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime, timedelta

from repairhub.core.exceptions import CacheWriteFailure
from repairhub.core.logging import bind_search_query, get_logger
from repairhub.services.search.cache import SearchCacheStore
from repairhub.services.search.fallback import generate_fallback_results
from repairhub.services.search.scoring import score_relevance
from repairhub.services.search.sources.base import SourceAdapter
from repairhub.services.search.types import SearchOutcome, SearchQuery, SearchResultItem

logger = get_logger(__name__)

DEFAULT_CACHE_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SearchAggregator:
    """Composes the cache store, source adapters, fallback and scorer."""

    def __init__(
        self,
        cache: SearchCacheStore,
        adapters: Sequence[SourceAdapter],
        *,
        fallback: Callable[[str], list[SearchResultItem]] = generate_fallback_results,
        scorer: Callable[[str, str], int] = score_relevance,
        cache_ttl: timedelta = DEFAULT_CACHE_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.cache = cache
        self.adapters = list(adapters)
        self.fallback = fallback
        self.scorer = scorer
        self.cache_ttl = cache_ttl
        self.clock = clock

    async def search(self, query: str | None, sources: Iterable[str] | None = None) -> SearchOutcome:
        """Run the full pipeline for one request."""
        parsed = SearchQuery.parse(query, sources)
        with bind_search_query(parsed.normalized):
            return await self._run(parsed)

    async def _run(self, parsed: SearchQuery) -> SearchOutcome:
        t0 = time.perf_counter()

        cached = await self.cache.lookup(parsed.normalized, self.clock())
        if cached:
            items = [item for item in cached if parsed.includes(item.source_name)]
            logger.info("search_cache_hit", cached_count=len(cached), result_count=len(items))
            return SearchOutcome(items=items, served_from_cache=True)

        logger.info("search_cache_miss", sources=sorted(parsed.sources))

        items = await self._fan_out(parsed)
        if not items:
            logger.info("search_fallback_used")
            items = self.fallback(parsed.text)

        scored = self._score(items, parsed.text)
        await self._write_back(parsed.normalized, scored)

        logger.info(
            "search_completed",
            result_count=len(scored),
            elapsed_ms=round((time.perf_counter() - t0) * 1000),
        )
        return SearchOutcome(items=scored, served_from_cache=False)

    async def _fan_out(self, parsed: SearchQuery) -> list[SearchResultItem]:
        """Invoke every requested adapter concurrently and concatenate."""
        selected = [a for a in self.adapters if parsed.includes(a.source_id)]
        if not selected:
            return []

        results = await asyncio.gather(
            *(adapter.fetch(parsed.text) for adapter in selected),
            return_exceptions=True,
        )

        merged: list[SearchResultItem] = []
        for adapter, result in zip(selected, results):
            if isinstance(result, BaseException):
                # fetch() already isolates failures; this guards custom adapters
                logger.warning("search_provider_failed", provider=adapter.source_id, error=str(result))
                continue
            merged.extend(result)
        return merged

    def _score(self, items: Iterable[SearchResultItem], query: str) -> list[SearchResultItem]:
        scored = [item.with_score(self.scorer(item.title, query)) for item in items]
        # sorted() is stable: ties keep insertion order
        return sorted(scored, key=lambda item: item.relevance_score, reverse=True)

    async def _write_back(self, normalized_query: str, items: list[SearchResultItem]) -> None:
        if not items:
            return
        cached_until = self.clock() + self.cache_ttl
        try:
            await self.cache.insert(normalized_query, items, cached_until)
        except CacheWriteFailure as e:
            logger.warning("search_cache_write_failed", error=e.message)
            return
        except Exception as e:
            # Stores other than the SQL one may raise their own errors
            logger.warning("search_cache_write_failed", error=str(e))
            return

        logger.debug("search_cache_written", result_count=len(items))
