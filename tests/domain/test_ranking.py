"""Tests for deterministic result ordering."""

from __future__ import annotations

from property_match.domain.models import MatchResult, MatchTier
from property_match.domain.ranking import rank


def _result(candidate_id: str, score: float, tier: MatchTier = MatchTier.PARTIAL) -> MatchResult:
    return MatchResult(candidate_id=candidate_id, score=score, tier=tier, label="")


def test_ties_are_broken_by_candidate_id() -> None:
    results = [_result("b", 72.0), _result("a", 72.0)]

    ranked = rank(results)

    assert [item.candidate_id for item in ranked] == ["a", "b"]
    assert rank(list(reversed(results))) == ranked


def test_rank_orders_by_score_descending() -> None:
    ranked = rank([_result("a", 40.0), _result("b", 90.0), _result("c", 65.5)])

    assert [item.candidate_id for item in ranked] == ["b", "c", "a"]


def test_equal_scores_prefer_higher_tier() -> None:
    ranked = rank(
        [
            _result("a", 80.0, MatchTier.PARTIAL),
            _result("b", 80.0, MatchTier.HIGH),
        ]
    )

    assert [item.candidate_id for item in ranked] == ["b", "a"]


def test_rank_is_idempotent() -> None:
    results = [_result("c", 10.0), _result("a", 55.0), _result("b", 55.0)]

    once = rank(results)

    assert rank(once) == once


def test_rank_never_drops_or_mutates() -> None:
    results = [_result("c", 10.0), _result("a", 55.0)]
    original = list(results)

    ranked = rank(results)

    assert results == original
    assert sorted(ranked, key=lambda item: item.candidate_id) == sorted(
        original, key=lambda item: item.candidate_id
    )


def test_rank_of_empty_input_is_empty() -> None:
    assert rank([]) == []
