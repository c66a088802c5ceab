"""Recommendations: score a candidate set against a profile and keep the best.

Usage example:
    from property_match.application.recommend import run_recommendations
    from property_match.domain.models import BudgetRange, PreferenceProfile

    profile = PreferenceProfile(
        budget=BudgetRange(minimum=500.0, maximum=1500.0),
        preferred_locations=("Lagos",),
    )
    summary = run_recommendations(candidates, profile, min_score=20.0, limit=10)
    print(summary.summary)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import partial

from ..domain.models import Candidate, Criterion, MatchResult, PreferenceProfile
from ..domain.ranking import rank
from ..domain.recommendation import score, validate_profile
from ..domain.weights import (
    DEFAULT_TIER_THRESHOLDS,
    TierThresholds,
    WeightTable,
    resolve_weights,
    validate_tier_thresholds,
)
from ..normalization import normalize, normalize_set
from ..observability import get_logger
from ..protocols import ProgressReporter
from .batch import score_batch

QUICK_MATCH_LIMIT = 20


@dataclass(frozen=True)
class RecommendationSummary:
    """Ranked recommendations plus a one-line human summary."""

    results: tuple[MatchResult, ...]
    summary: str
    scored_count: int

    @property
    def average_score(self) -> float:
        if not self.results:
            return 0.0
        return sum(result.score for result in self.results) / len(self.results)


def summarise(results: tuple[MatchResult, ...]) -> str:
    if not results:
        return "No properties matched your preferences."
    average = sum(result.score for result in results) / len(results)
    return (
        f"I found {len(results)} properties matching your preferences "
        f"with an average compatibility of {round(average)}%."
    )


def run_recommendations(
    candidates: Iterable[Candidate],
    profile: PreferenceProfile,
    *,
    weights: Mapping[Criterion, float] | WeightTable | None = None,
    thresholds: TierThresholds = DEFAULT_TIER_THRESHOLDS,
    min_score: float = 20.0,
    limit: int | None = 10,
    max_workers: int | None = None,
    should_stop: Callable[[], bool] | None = None,
    progress: ProgressReporter | None = None,
) -> RecommendationSummary:
    """Score every candidate, drop weak matches, rank and truncate.

    Results scoring at or below ``min_score`` are dropped. Configuration errors
    (weights, thresholds, budget or bedroom ranges) are raised before any
    candidate is scored.
    """
    logger = get_logger("property_match.recommend")
    validate_profile(profile)
    validate_tier_thresholds(thresholds)
    table = resolve_weights(weights if weights is not None else profile.weights)

    scored = score_batch(
        candidates,
        partial(score, profile, weights=table, thresholds=thresholds),
        should_stop=should_stop,
        max_workers=max_workers,
        progress=progress,
    )
    kept = rank(result for result in scored if result.score > min_score)
    if limit is not None:
        kept = kept[:limit]

    results = tuple(kept)
    logger.info(
        "Kept %s of %s scored candidates above %.1f (weights: %s)",
        len(results),
        len(scored),
        min_score,
        table.name,
    )
    return RecommendationSummary(
        results=results,
        summary=summarise(results),
        scored_count=len(scored),
    )


def _passes_quick_filter(
    candidate: Candidate,
    profile: PreferenceProfile,
    desired_types: frozenset[str],
    locations: tuple[str, ...],
) -> bool:
    budget = profile.budget
    if budget is not None and (candidate.price is None or not budget.contains(candidate.price)):
        return False
    if desired_types and normalize(candidate.property_type) not in desired_types:
        return False
    if profile.min_bedrooms and candidate.bedroom_count < profile.min_bedrooms:
        return False
    if locations:
        city = normalize(candidate.location.city)
        state = normalize(candidate.location.state)
        if not any(location in city or location in state for location in locations):
            return False
    if (
        profile.move_in_by is not None
        and candidate.available_from is not None
        and candidate.available_from > profile.move_in_by
    ):
        return False
    return True


def quick_matches(
    candidates: Iterable[Candidate],
    profile: PreferenceProfile,
    *,
    limit: int = QUICK_MATCH_LIMIT,
) -> list[Candidate]:
    """Hard-filter candidates on the profile without scoring, keeping input order."""
    desired_types = normalize_set(profile.desired_types)
    locations = tuple(
        location for location in (normalize(item) for item in profile.preferred_locations) if location
    )
    matches: list[Candidate] = []
    for candidate in candidates:
        if len(matches) >= limit:
            break
        if _passes_quick_filter(candidate, profile, desired_types, locations):
            matches.append(candidate)
    return matches
