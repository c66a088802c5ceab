"""Deterministic ordering of match results for display and pagination."""

from __future__ import annotations

from collections.abc import Iterable

from .models import MatchResult


def sort_key(result: MatchResult) -> tuple[float, int, str]:
    """Score descending, then tier descending, then candidate id ascending."""
    return (-result.score, -result.tier.rank, result.candidate_id)


def rank(results: Iterable[MatchResult]) -> list[MatchResult]:
    """Return results in ranked order.

    The sort is stable and total, so ``rank(rank(xs)) == rank(xs)``. Entries are
    neither dropped nor modified; an empty input gives an empty list.
    """
    return sorted(results, key=sort_key)
