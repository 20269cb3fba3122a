"""FastAPI dependencies."""

from datetime import timedelta
from functools import partial
from typing import Annotated

import httpx
from fastapi import Depends, Request

from repairhub.config import Settings, get_settings
from repairhub.services.search import SearchAggregator, SqlSearchCacheStore, generate_fallback_results
from repairhub.services.search.sources import build_http_client, build_source_adapters


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Provider client created in the app lifespan."""
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        client = build_http_client(get_settings())
        request.app.state.http_client = client
    return client


def get_search_aggregator(
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SearchAggregator:
    return SearchAggregator(
        cache=SqlSearchCacheStore(),
        adapters=build_source_adapters(client, settings),
        fallback=partial(
            generate_fallback_results,
            guide_site_base=settings.guide_site_base,
            forum_base=settings.forum_base,
            forum_subreddit=settings.forum_subreddit,
            video_base=settings.video_base,
        ),
        cache_ttl=timedelta(hours=settings.search_cache_ttl_hours),
    )


Aggregator = Annotated[SearchAggregator, Depends(get_search_aggregator)]
