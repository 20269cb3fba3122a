"""Local relevance scoring for search results."""

from __future__ import annotations

SUBSTRING_BONUS = 100
WORD_BONUS = 20
LENGTH_PENALTY_DIVISOR = 20
MIN_SCORE = 10


def score_relevance(title: str, query: str) -> int:
    """Rank ``title`` against ``query``.

    +100 if the whole query appears in the title, +20 per query word
    (length > 1, duplicates counted) found in the title, minus one point
    per 20 title characters. Never below 10.
    """
    title_lower = title.lower()
    query_lower = query.lower()

    score = 0
    if query_lower in title_lower:
        score += SUBSTRING_BONUS

    for word in query_lower.split():
        if len(word) > 1 and word in title_lower:
            score += WORD_BONUS

    score -= len(title) // LENGTH_PENALTY_DIVISOR

    return max(MIN_SCORE, score)
