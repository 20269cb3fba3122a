"""Source adapters for the search aggregator."""

from repairhub.services.search.sources.base import HttpSourceAdapter, SourceAdapter
from repairhub.services.search.sources.factory import build_http_client, build_source_adapters
from repairhub.services.search.sources.forum import ForumSourceAdapter
from repairhub.services.search.sources.guides import GuideSourceAdapter
from repairhub.services.search.sources.video import VideoSourceAdapter

__all__ = [
    "SourceAdapter",
    "HttpSourceAdapter",
    "GuideSourceAdapter",
    "ForumSourceAdapter",
    "VideoSourceAdapter",
    "build_http_client",
    "build_source_adapters",
]
