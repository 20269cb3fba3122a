"""Search result cache — rows keyed by normalized query with an expiry.

Expiry is a read-time predicate: stale rows simply stop matching, nothing
deletes them. Concurrent misses for the same query may both write; reads
then see duplicate rows, which is tolerated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from repairhub.core.exceptions import CacheWriteFailure
from repairhub.core.logging import get_logger
from repairhub.database import get_session_maker
from repairhub.models.search_cache import SearchCacheEntry
from repairhub.services.search.types import SearchResultItem

logger = get_logger(__name__)


class SearchCacheStore(ABC):
    """Point lookup by normalized query + bulk insert."""

    @abstractmethod
    async def lookup(self, normalized_query: str, now: datetime) -> list[SearchResultItem]:
        """All rows for the query with ``cached_until > now``, best score first."""

    @abstractmethod
    async def insert(
        self,
        normalized_query: str,
        items: Sequence[SearchResultItem],
        cached_until: datetime,
    ) -> None:
        """Persist ``items`` for the query. Raises CacheWriteFailure."""


def _entry_to_item(entry: SearchCacheEntry) -> SearchResultItem:
    return SearchResultItem(
        title=entry.title,
        source_url=entry.source_url,
        source_name=entry.source_name,
        image_url=entry.image_url,
        description=entry.description,
        relevance_score=entry.relevance_score,
    )


class SqlSearchCacheStore(SearchCacheStore):
    """SQLAlchemy implementation over the ``web_search_results`` table.

    The session factory is resolved on first use, so a missing DATABASE_URL
    surfaces as ConfigurationFailure from the first lookup.
    """

    def __init__(
        self,
        session_maker_provider: Callable[[], async_sessionmaker] = get_session_maker,
    ) -> None:
        self._session_maker_provider = session_maker_provider

    async def lookup(self, normalized_query: str, now: datetime) -> list[SearchResultItem]:
        session_maker = self._session_maker_provider()
        try:
            async with session_maker() as db:
                result = await db.execute(
                    select(SearchCacheEntry)
                    .where(SearchCacheEntry.query == normalized_query)
                    .where(SearchCacheEntry.cached_until > now)
                    .order_by(
                        SearchCacheEntry.relevance_score.desc(),
                        SearchCacheEntry.created_at.asc(),
                        SearchCacheEntry.position.asc(),
                    )
                )
                entries = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.warning("search_cache_read_failed", error=str(e))
            return []

        return [_entry_to_item(e) for e in entries]

    async def insert(
        self,
        normalized_query: str,
        items: Sequence[SearchResultItem],
        cached_until: datetime,
    ) -> None:
        if not items:
            return

        rows = [
            {
                "query": normalized_query,
                "title": item.title,
                "source_url": item.source_url,
                "image_url": item.image_url,
                "source_name": item.source_name,
                "description": item.description,
                "relevance_score": item.relevance_score,
                "position": position,
                "cached_until": cached_until,
            }
            for position, item in enumerate(items)
        ]

        session_maker = self._session_maker_provider()
        try:
            async with session_maker() as db:
                async with db.begin():
                    await db.execute(insert(SearchCacheEntry), rows)
        except (SQLAlchemyError, OSError) as e:
            raise CacheWriteFailure(f"Failed to cache {len(rows)} results: {e}") from e
