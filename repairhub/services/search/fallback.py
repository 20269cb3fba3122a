"""Placeholder results used when every provider comes back empty."""

from __future__ import annotations

from urllib.parse import quote, urlencode

from repairhub.services.search.types import SearchResultItem, SourceId

_GEARS_IMAGE = "https://images.pexels.com/photos/159298/gears-cogs-machine-machinery-159298.jpeg?auto=compress&cs=tinysrgb&w=400"
_LAPTOP_IMAGE = "https://images.pexels.com/photos/1181298/pexels-photo-1181298.jpeg?auto=compress&cs=tinysrgb&w=400"
_TOOLS_IMAGE = "https://images.pexels.com/photos/257736/pexels-photo-257736.jpeg?auto=compress&cs=tinysrgb&w=400"


def generate_fallback_results(
    query: str,
    *,
    guide_site_base: str = "https://www.ifixit.com",
    forum_base: str = "https://www.reddit.com",
    forum_subreddit: str = "ifixit",
    video_base: str = "https://www.youtube.com",
) -> list[SearchResultItem]:
    """One generic "search there" pointer per provider, in provider order."""
    return [
        SearchResultItem(
            title=f"{query} Repair Guide - iFixit Community",
            source_url=f"{guide_site_base.rstrip('/')}/Search?query={quote(query, safe='')}",
            source_name=SourceId.GUIDE.value,
            image_url=_GEARS_IMAGE,
            description=f"Search results for {query} on iFixit",
        ),
        SearchResultItem(
            title=f"{query} Repair Discussion - Reddit",
            source_url=(
                f"{forum_base.rstrip('/')}/r/{forum_subreddit}/search/"
                f"?q={quote(query, safe='')}&restrict_sr=1"
            ),
            source_name=SourceId.FORUM.value,
            image_url=_LAPTOP_IMAGE,
            description=f"Community discussions about {query} repair",
        ),
        SearchResultItem(
            title=f"{query} Repair Videos - YouTube",
            source_url=f"{video_base.rstrip('/')}/results?{urlencode({'search_query': f'{query} repair'})}",
            source_name=SourceId.VIDEO.value,
            image_url=_TOOLS_IMAGE,
            description=f"Video tutorials for {query} repair",
        ),
    ]
