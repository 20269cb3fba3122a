"""Video platform adapter.

The platform has no unauthenticated search API, so this adapter performs no
lookup: it always returns the same two synthetic items for a query, both
pointing at the platform's own search-results page.
"""

from __future__ import annotations

from urllib.parse import urlencode

from repairhub.services.search.sources.base import SourceAdapter
from repairhub.services.search.types import SearchResultItem, SourceId

PLACEHOLDER_THUMBNAILS = (
    "https://images.pexels.com/photos/1181298/pexels-photo-1181298.jpeg?auto=compress&cs=tinysrgb&w=400",
    "https://images.pexels.com/photos/159298/gears-cogs-machine-machinery-159298.jpeg?auto=compress&cs=tinysrgb&w=400",
)


def video_search_url(base_url: str, search_query: str) -> str:
    return f"{base_url.rstrip('/')}/results?{urlencode({'search_query': search_query})}"


class VideoSourceAdapter(SourceAdapter):
    """Synthetic stand-in for a video search integration."""

    source_id = SourceId.VIDEO.value

    def __init__(self, *, base_url: str = "https://www.youtube.com", timeout_seconds: float = 8.0) -> None:
        super().__init__(timeout_seconds=timeout_seconds)
        self.base_url = base_url

    async def search(self, query: str) -> list[SearchResultItem]:
        url = video_search_url(self.base_url, f"{query} repair guide tutorial")
        return [
            SearchResultItem(
                title=f"How to Fix {query} - Complete Repair Guide",
                source_url=url,
                source_name=self.source_id,
                image_url=PLACEHOLDER_THUMBNAILS[0],
                description=f"Step-by-step video tutorial for {query} repair",
            ),
            SearchResultItem(
                title=f"{query} Repair Tutorial - DIY Fix",
                source_url=url,
                source_name=self.source_id,
                image_url=PLACEHOLDER_THUMBNAILS[1],
                description=f"Professional repair guide for {query}",
            ),
        ]
