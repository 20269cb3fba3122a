"""Guide repository adapter (iFixit API 2.0).

The provider's response shape has drifted over time, so the payload is
parsed as a small tagged variant: a ``results`` array, a ``guides`` array,
or a bare top-level array. The first non-empty one wins.

Two endpoints are tried in order; the second is only consulted when the
first yields no usable items.
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import quote

import httpx

from repairhub.core.exceptions import ProviderFailure
from repairhub.core.logging import get_logger
from repairhub.services.search.sources.base import HttpSourceAdapter, text_field
from repairhub.services.search.types import SearchResultItem, SourceId

logger = get_logger(__name__)

UNTITLED_GUIDE = "Untitled Guide"
ENDPOINT_LIMIT = 10


# ── Response shape variants ───────────────────────────────────────


def items_from_results(data) -> list[dict]:
    """Shape A: ``{"results": [...]}``."""
    if isinstance(data, dict) and isinstance(data.get("results"), list):
        return data["results"]
    return []


def items_from_guides(data) -> list[dict]:
    """Shape B: ``{"guides": [...]}``."""
    if isinstance(data, dict) and isinstance(data.get("guides"), list):
        return data["guides"]
    return []


def items_from_bare_list(data) -> list[dict]:
    """Shape C: a bare top-level array."""
    if isinstance(data, list):
        return data
    return []


SHAPE_PARSERS: tuple[Callable[[object], list[dict]], ...] = (
    items_from_results,
    items_from_guides,
    items_from_bare_list,
)


def extract_raw_items(data) -> list[dict]:
    """Return the first non-empty item list any known shape produces."""
    for parser in SHAPE_PARSERS:
        items = parser(data)
        if items:
            return [item for item in items if isinstance(item, dict)]
    return []


# ── Item mapping ──────────────────────────────────────────────────


def _has_content_marker(item: dict) -> bool:
    return item.get("dataType") == "guide" or bool(item.get("title")) or bool(item.get("guideid"))


def _image_url(item: dict) -> str | None:
    image = item.get("image")
    if isinstance(image, dict):
        url = text_field(image, "medium", "standard")
        if url:
            return url
    return text_field(item, "thumbnail")


def map_guide_item(item: dict, site_base: str) -> SearchResultItem | None:
    """Map one raw guide record, or None if it has no content marker or URL.

    Fields of the wrong type are treated as absent.
    """
    if not _has_content_marker(item):
        return None

    title = text_field(item, "title", "display_title") or UNTITLED_GUIDE

    url = text_field(item, "url")
    guide_id = item.get("guideid")
    if not url and guide_id and isinstance(guide_id, (int, str)):
        url = f"/Guide/{guide_id}"
    if not url:
        return None
    if not url.startswith("http"):
        url = f"{site_base.rstrip('/')}/{url.lstrip('/')}"

    return SearchResultItem(
        title=title,
        source_url=url,
        source_name=SourceId.GUIDE.value,
        image_url=_image_url(item),
        description=(
            text_field(item, "summary", "introduction")
            or f"{title} repair guide from iFixit"
        ),
    )


# ── Adapter ───────────────────────────────────────────────────────


class GuideSourceAdapter(HttpSourceAdapter):
    """Searches the guide repository, falling back to its listing endpoint."""

    source_id = SourceId.GUIDE.value

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_base: str = "https://www.ifixit.com/api/2.0",
        site_base: str = "https://www.ifixit.com",
        timeout_seconds: float = 8.0,
        max_results: int = 8,
    ) -> None:
        super().__init__(client, timeout_seconds=timeout_seconds, max_results=max_results)
        self.api_base = api_base.rstrip("/")
        self.site_base = site_base

    def endpoints(self, query: str) -> list[tuple[str, dict]]:
        return [
            (
                f"{self.api_base}/search/{quote(query, safe='')}",
                {"limit": ENDPOINT_LIMIT},
            ),
            (
                f"{self.api_base}/guides",
                {"filter": "search", "query": query, "limit": ENDPOINT_LIMIT},
            ),
        ]

    async def search(self, query: str) -> list[SearchResultItem]:
        last_error: ProviderFailure | None = None
        attempted_ok = False

        for url, params in self.endpoints(query):
            try:
                data = await self._get_json(url, params=params)
            except ProviderFailure as e:
                logger.debug("guide_endpoint_failed", url=url, error=str(e))
                last_error = e
                continue

            attempted_ok = True
            results = []
            for raw in extract_raw_items(data)[: self.max_results]:
                mapped = map_guide_item(raw, self.site_base)
                if mapped is not None:
                    results.append(mapped)

            if results:
                return results
            logger.debug("guide_endpoint_empty", url=url)

        if not attempted_ok and last_error is not None:
            raise last_error
        return []
