"""Base class for search source adapters.

Each adapter maps one provider's response shape into SearchResultItems.
``fetch`` never raises: ProviderFailure, transport errors, timeouts and
malformed payloads are logged with the provider's name and mapped to an
empty list.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

import httpx

from repairhub.core.exceptions import ProviderFailure
from repairhub.core.logging import get_logger
from repairhub.services.search.types import SearchResultItem

logger = get_logger(__name__)


def text_field(record: dict, *keys: str) -> str | None:
    """First value under ``keys`` that is a non-empty string."""
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value:
            return value
    return None


class SourceAdapter(ABC):
    """One content provider behind the ``fetch(query) -> items`` capability."""

    source_id: str = ""

    def __init__(self, timeout_seconds: float = 8.0) -> None:
        self.timeout_seconds = timeout_seconds

    @abstractmethod
    async def search(self, query: str) -> list[SearchResultItem]:
        """Provider-specific lookup. May raise."""

    async def fetch(self, query: str) -> list[SearchResultItem]:
        """Run ``search`` under the per-call timeout, isolating every failure."""
        try:
            results = await asyncio.wait_for(self.search(query), timeout=self.timeout_seconds)
        except TimeoutError:
            logger.warning(
                "search_provider_timeout",
                provider=self.source_id,
                timeout_seconds=self.timeout_seconds,
            )
            return []
        except Exception as e:
            logger.warning("search_provider_failed", provider=self.source_id, error=str(e))
            return []

        logger.info("search_provider_completed", provider=self.source_id, result_count=len(results))
        return results


class HttpSourceAdapter(SourceAdapter):
    """Adapter that talks to its provider through a shared httpx client."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        timeout_seconds: float = 8.0,
        max_results: int = 8,
    ) -> None:
        super().__init__(timeout_seconds=timeout_seconds)
        self.client = client
        self.max_results = max_results

    async def _get_json(self, url: str, params: dict | None = None):
        """GET ``url`` and decode JSON, raising ProviderFailure on any error."""
        try:
            resp = await self.client.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise ProviderFailure(
                self.source_id,
                f"HTTP {e.response.status_code} from {url}",
            ) from e
        except httpx.RequestError as e:
            raise ProviderFailure(self.source_id, f"request to {url} failed: {e}") from e
        except ValueError as e:
            raise ProviderFailure(self.source_id, f"malformed JSON from {url}") from e
