"""Search endpoints — multi-source repair content search."""

from __future__ import annotations

from fastapi import APIRouter, Response

from repairhub.core.exceptions import SearchError
from repairhub.core.logging import get_logger
from repairhub.core.middleware import CORS_HEADERS
from repairhub.deps import Aggregator
from repairhub.schemas.search import SearchErrorResponse, SearchRequest, SearchResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=SearchResponse,
    responses={400: {"model": SearchErrorResponse}, 500: {"model": SearchErrorResponse}},
)
async def search(data: SearchRequest, aggregator: Aggregator) -> SearchResponse:
    """Search guides, forum threads and videos, served from cache when fresh."""
    try:
        outcome = await aggregator.search(data.query, data.sources)
    except SearchError:
        raise
    except Exception as e:
        logger.exception("search_failed", error=str(e))
        raise SearchError(str(e) or "Search failed") from e

    return SearchResponse.from_outcome(outcome)


@router.options("")
async def search_preflight() -> Response:
    """CORS preflight."""
    return Response(status_code=200, headers=CORS_HEADERS)
