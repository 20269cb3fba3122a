"""Search schemas — request body and response envelopes for /search."""

from __future__ import annotations

from pydantic import BaseModel, Field

from repairhub.services.search.types import SearchOutcome, SearchResultItem


class SearchRequest(BaseModel):
    """Body of POST /search. Length is validated by the aggregator."""

    query: str | None = None
    sources: list[str] = Field(default_factory=lambda: ["all"])


class SearchResultRead(BaseModel):
    title: str
    source_url: str
    image_url: str | None = None
    source_name: str
    description: str | None = None
    relevance_score: int

    @classmethod
    def from_item(cls, item: SearchResultItem) -> SearchResultRead:
        return cls(**item.to_dict())


class SearchResponse(BaseModel):
    """Successful search envelope."""

    success: bool = True
    results: list[SearchResultRead] = []
    cached: bool = False
    total: int = 0

    @classmethod
    def from_outcome(cls, outcome: SearchOutcome) -> SearchResponse:
        return cls(
            results=[SearchResultRead.from_item(i) for i in outcome.items],
            cached=outcome.served_from_cache,
            total=outcome.total,
        )


class SearchErrorResponse(BaseModel):
    success: bool = False
    error: str
