"""Pydantic schemas for API request/response validation."""

from repairhub.schemas.search import (
    SearchErrorResponse,
    SearchRequest,
    SearchResponse,
    SearchResultRead,
)

__all__ = [
    "SearchErrorResponse",
    "SearchRequest",
    "SearchResponse",
    "SearchResultRead",
]
