"""Free-text location search over a candidate set.

Usage example:
    from property_match.application.search import run_location_search

    hits = run_location_search(candidates, "Lekki", limit=10)
    for hit in hits:
        print(hit.result.candidate_id, hit.result.label, hit.relevance)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..domain.location_matching import (
    BestFieldPolicy,
    classify,
    location_score,
    matches_location_search,
)
from ..domain.models import Candidate, MatchResult
from ..domain.ranking import sort_key
from ..observability import get_logger


@dataclass(frozen=True)
class SearchHit:
    """A search match: the display classification plus the sort relevance."""

    result: MatchResult
    relevance: float


def _hit_key(hit: SearchHit) -> tuple[float, float, int, str]:
    return (-hit.relevance, *sort_key(hit.result))


def run_location_search(
    candidates: Iterable[Candidate],
    query: str,
    *,
    limit: int | None = None,
    policy: BestFieldPolicy = BestFieldPolicy.FIRST_MATCH,
) -> list[SearchHit]:
    """Return candidates matching ``query``, most relevant first."""
    logger = get_logger("property_match.search")
    hits: list[SearchHit] = []
    total = 0
    for candidate in candidates:
        total += 1
        if not matches_location_search(query, candidate.location):
            continue
        hits.append(
            SearchHit(
                result=classify(query, candidate.location, candidate.candidate_id, policy),
                relevance=location_score(query, candidate.location),
            )
        )

    hits.sort(key=_hit_key)
    if limit is not None:
        hits = hits[:limit]
    logger.info("Location search kept %s of %s candidates", len(hits), total)
    return hits
