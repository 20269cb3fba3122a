"""Value objects shared by the search aggregation pipeline."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field, replace
from enum import StrEnum

from repairhub.core.exceptions import InvalidQuery

MIN_QUERY_LENGTH = 2


class SourceId(StrEnum):
    """Closed set of source identifiers a request can name."""

    ALL = "all"
    GUIDE = "guide-source"
    FORUM = "forum-source"
    VIDEO = "video-source"


PROVIDER_IDS: tuple[SourceId, ...] = (SourceId.GUIDE, SourceId.FORUM, SourceId.VIDEO)


@dataclass(frozen=True)
class SearchQuery:
    """A validated search request.

    ``text`` keeps the caller's casing for provider calls and templated
    titles; ``normalized`` is the cache key.
    """

    text: str
    sources: frozenset[str] = field(default_factory=lambda: frozenset({SourceId.ALL.value}))

    @classmethod
    def parse(cls, raw: str | None, sources: Iterable[str] | None = None) -> SearchQuery:
        """Trim and validate; raises InvalidQuery before any I/O happens."""
        text = (raw or "").strip()
        if len(text) < MIN_QUERY_LENGTH:
            raise InvalidQuery(f"Query must be at least {MIN_QUERY_LENGTH} characters long")

        requested = frozenset(s.strip().lower() for s in (sources or []) if isinstance(s, str))
        if not requested:
            requested = frozenset({SourceId.ALL.value})
        return cls(text=text, sources=requested)

    @property
    def normalized(self) -> str:
        return self.text.lower()

    @property
    def wants_all(self) -> bool:
        return SourceId.ALL.value in self.sources

    def includes(self, source_name: str) -> bool:
        """True if results from ``source_name`` were requested."""
        return self.wants_all or source_name.lower() in self.sources


@dataclass(frozen=True)
class SearchResultItem:
    """One discoverable piece of repair content."""

    title: str
    source_url: str
    source_name: str
    image_url: str | None = None
    description: str | None = None
    relevance_score: int = 0

    def with_score(self, score: int) -> SearchResultItem:
        return replace(self, relevance_score=score)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SearchOutcome:
    """Result of one aggregation call."""

    items: list[SearchResultItem] = field(default_factory=list)
    served_from_cache: bool = False

    @property
    def total(self) -> int:
        return len(self.items)
