"""Factory for the shared provider HTTP client and source adapters."""

from __future__ import annotations

import httpx

from repairhub.config import Settings
from repairhub.services.search.sources.base import SourceAdapter
from repairhub.services.search.sources.forum import ForumSourceAdapter
from repairhub.services.search.sources.guides import GuideSourceAdapter
from repairhub.services.search.sources.video import VideoSourceAdapter


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Client shared by all HTTP adapters, identifying the calling application."""
    return httpx.AsyncClient(
        timeout=settings.search_provider_timeout_seconds,
        follow_redirects=True,
        headers={
            "User-Agent": settings.search_user_agent,
            "Accept": settings.search_accept,
        },
    )


def build_source_adapters(client: httpx.AsyncClient, settings: Settings) -> list[SourceAdapter]:
    """Adapters in concatenation order: guide, forum, video."""
    timeout = settings.search_provider_timeout_seconds
    cap = settings.search_max_results_per_source
    return [
        GuideSourceAdapter(
            client,
            api_base=settings.guide_api_base,
            site_base=settings.guide_site_base,
            timeout_seconds=timeout,
            max_results=cap,
        ),
        ForumSourceAdapter(
            client,
            base_url=settings.forum_base,
            subreddit=settings.forum_subreddit,
            timeout_seconds=timeout,
            max_results=cap,
        ),
        VideoSourceAdapter(base_url=settings.video_base, timeout_seconds=timeout),
    ]
