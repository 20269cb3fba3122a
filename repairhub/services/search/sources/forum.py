"""Discussion forum adapter (Reddit search restricted to one subreddit)."""

from __future__ import annotations

import httpx

from repairhub.core.exceptions import ProviderFailure
from repairhub.services.search.sources.base import HttpSourceAdapter, text_field
from repairhub.services.search.types import SearchResultItem, SourceId

DESCRIPTION_CHARS = 200
DELETED_TITLE = "[deleted]"


def iter_posts(data) -> list[dict]:
    """Return the post payloads from a listing response."""
    if not isinstance(data, dict):
        raise ValueError("listing is not an object")
    children = (data.get("data") or {}).get("children")
    if not isinstance(children, list):
        return []
    return [
        child["data"]
        for child in children
        if isinstance(child, dict) and isinstance(child.get("data"), dict)
    ]


def map_post(post: dict, forum_base: str, subreddit: str) -> SearchResultItem | None:
    """Map one post, or None if it was removed, deleted or untitled."""
    title = text_field(post, "title")
    if post.get("removed_by_category") or not title or title == DELETED_TITLE:
        return None

    permalink = text_field(post, "permalink")
    if not permalink:
        return None

    thumbnail = text_field(post, "thumbnail")
    body = text_field(post, "selftext")

    return SearchResultItem(
        title=title,
        source_url=f"{forum_base.rstrip('/')}{permalink}",
        source_name=SourceId.FORUM.value,
        image_url=thumbnail if thumbnail and thumbnail.startswith("http") else None,
        description=(
            f"{body[:DESCRIPTION_CHARS]}..."
            if body
            else f"Discussion on r/{subreddit} about {title}"
        ),
    )


class ForumSourceAdapter(HttpSourceAdapter):
    """One relevance-sorted search against a fixed subreddit."""

    source_id = SourceId.FORUM.value

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str = "https://www.reddit.com",
        subreddit: str = "ifixit",
        timeout_seconds: float = 8.0,
        max_results: int = 8,
    ) -> None:
        super().__init__(client, timeout_seconds=timeout_seconds, max_results=max_results)
        self.base_url = base_url.rstrip("/")
        self.subreddit = subreddit

    async def search(self, query: str) -> list[SearchResultItem]:
        url = f"{self.base_url}/r/{self.subreddit}/search.json"
        data = await self._get_json(
            url,
            params={
                "q": query,
                "restrict_sr": 1,
                "limit": self.max_results,
                "sort": "relevance",
            },
        )
        try:
            posts = iter_posts(data)
        except ValueError as e:
            raise ProviderFailure(self.source_id, str(e)) from e

        results = []
        for post in posts[: self.max_results]:
            item = map_post(post, self.base_url, self.subreddit)
            if item is not None:
                results.append(item)
        return results
