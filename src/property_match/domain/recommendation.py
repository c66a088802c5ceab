"""Weighted multi-criteria scoring of a property against a preference profile.

Each criterion yields a sub-score in 0.0–1.0; the total is the weighted mean of
the sub-scores as a percentage, so results stay comparable whichever weights a
profile customised.

Usage example:
    from property_match.domain.models import BudgetRange, Candidate, PreferenceProfile
    from property_match.domain.recommendation import score

    profile = PreferenceProfile(budget=BudgetRange(1000.0, 1500.0))
    result = score(profile, Candidate(candidate_id="p-1", price=1200.0))
    assert 0.0 <= result.score <= 100.0
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from ..exceptions import ConfigurationError
from ..normalization import normalize, normalize_set
from .location_matching import match_location
from .models import BudgetRange, Candidate, Criterion, MatchResult, PreferenceProfile
from .weights import DEFAULT_TIER_THRESHOLDS, TierThresholds, WeightTable, resolve_weights

MAX_REASONS = 3

# Price sub-score reaches zero this far beyond the nearer budget bound.
PRICE_TOLERANCE_RATIO = 0.5
# Bedroom sub-score lost per bedroom outside the desired range.
BEDROOM_PENALTY_PER_ROOM = 0.2

FAMILY_MIN_BEDROOMS = 3


@dataclass(frozen=True)
class CriterionScore:
    """Sub-score and weighted contribution of one criterion."""

    criterion: Criterion
    sub_score: float  # 0.0–1.0
    weight: float
    reason: str
    constrained: bool = True

    @property
    def contribution(self) -> float:
        return self.weight * self.sub_score


def score_location(profile: PreferenceProfile, candidate: Candidate) -> float:
    """1.0 for an exact city/state preference, else the best classifier match."""
    if not profile.preferred_locations:
        return 0.0

    city = normalize(candidate.location.city)
    state = normalize(candidate.location.state)
    preferred = [normalize(loc) for loc in profile.preferred_locations]
    if any(pref and pref in (city, state) for pref in preferred):
        return 1.0

    best = 0.0
    for pref in profile.preferred_locations:
        match = match_location(pref, candidate.location)
        if match.is_signal:
            best = max(best, match.score / 100.0)
    return best


def score_price(budget: BudgetRange | None, price: float | None) -> float:
    """1.0 inside the budget, decaying linearly to 0 at 50% past the nearer bound."""
    if budget is None:
        return 1.0
    if price is None:
        return 0.0
    if budget.contains(price):
        return 1.0

    nearer_bound = budget.minimum if price < budget.minimum else budget.maximum
    if nearer_bound <= 0.0:
        return 0.0
    distance = abs(price - nearer_bound)
    return max(0.0, 1.0 - distance / (PRICE_TOLERANCE_RATIO * nearer_bound))


def score_type(desired_types: frozenset[str], property_type: str) -> float:
    desired = normalize_set(desired_types)
    if not desired:
        return 1.0
    return 1.0 if normalize(property_type) in desired else 0.0


def score_bedrooms(min_bedrooms: int | None, max_bedrooms: int | None, bedrooms: int) -> float:
    """1.0 inside the range, minus 0.2 per bedroom outside it, floored at 0."""
    if min_bedrooms is not None and bedrooms < min_bedrooms:
        distance = min_bedrooms - bedrooms
    elif max_bedrooms is not None and bedrooms > max_bedrooms:
        distance = bedrooms - max_bedrooms
    else:
        return 1.0
    return max(0.0, 1.0 - BEDROOM_PENALTY_PER_ROOM * distance)


def score_amenities(desired: frozenset[str], available: frozenset[str]) -> float:
    wanted = normalize_set(desired)
    matched = wanted & normalize_set(available)
    return len(matched) / max(1, len(wanted))


def score_lifestyle(lifestyle: str | None, candidate: Candidate) -> float:
    style = normalize(lifestyle)
    property_type = normalize(candidate.property_type)
    if style == "luxury" and property_type == "penthouse":
        return 1.0
    if style == "minimalist" and property_type == "studio":
        return 1.0
    if style == "family" and candidate.bedroom_count >= FAMILY_MIN_BEDROOMS:
        return 1.0
    return 0.0


def _reason(
    criterion: Criterion,
    sub_score: float,
    profile: PreferenceProfile,
    candidate: Candidate,
) -> str:
    full = sub_score >= 1.0
    if criterion is Criterion.LOCATION:
        return "Matches your preferred location" if full else "Near your preferred location"
    if criterion is Criterion.PRICE:
        return "Within your budget range" if full else "Close to your budget range"
    if criterion is Criterion.TYPE:
        return f"Matches your {normalize(candidate.property_type) or 'property type'} preference"
    if criterion is Criterion.BEDROOMS:
        return "Perfect bedroom count match" if full else "Close to ideal bedroom count"
    if criterion is Criterion.AMENITIES:
        wanted = normalize_set(profile.desired_amenities)
        matched = wanted & normalize_set(candidate.amenities)
        return f"Has {len(matched)} of your {len(wanted)} preferred amenities"
    return f"Suits a {normalize(profile.lifestyle)} lifestyle"


def _is_constrained(criterion: Criterion, profile: PreferenceProfile) -> bool:
    if criterion is Criterion.PRICE:
        return profile.budget is not None
    if criterion is Criterion.TYPE:
        return bool(normalize_set(profile.desired_types))
    if criterion is Criterion.BEDROOMS:
        return profile.min_bedrooms is not None or profile.max_bedrooms is not None
    return True


def score_criteria(
    profile: PreferenceProfile,
    candidate: Candidate,
    weights: WeightTable,
) -> tuple[CriterionScore, ...]:
    """Compute every criterion's sub-score, in criterion declaration order."""
    sub_scores = {
        Criterion.LOCATION: score_location(profile, candidate),
        Criterion.PRICE: score_price(profile.budget, candidate.price),
        Criterion.TYPE: score_type(profile.desired_types, candidate.property_type),
        Criterion.BEDROOMS: score_bedrooms(
            profile.min_bedrooms, profile.max_bedrooms, candidate.bedroom_count
        ),
        Criterion.AMENITIES: score_amenities(profile.desired_amenities, candidate.amenities),
        Criterion.LIFESTYLE: score_lifestyle(profile.lifestyle, candidate),
    }
    return tuple(
        CriterionScore(
            criterion=criterion,
            sub_score=sub_score,
            weight=weights.weight(criterion),
            reason=_reason(criterion, sub_score, profile, candidate),
            constrained=_is_constrained(criterion, profile),
        )
        for criterion, sub_score in sub_scores.items()
    )


def top_reasons(criteria: tuple[CriterionScore, ...], limit: int = MAX_REASONS) -> tuple[str, ...]:
    """Reasons for the highest contributions.

    Zero sub-scores and criteria the profile leaves open (no budget, no desired
    types, no bedroom bounds) are never listed.
    """
    contributing = [
        item
        for item in criteria
        if item.constrained and item.sub_score > 0.0 and item.contribution > 0.0
    ]
    # sorted() is stable, so equal contributions keep criterion declaration order.
    ranked = sorted(contributing, key=lambda item: item.contribution, reverse=True)
    return tuple(item.reason for item in ranked[:limit])


def validate_profile(profile: PreferenceProfile) -> None:
    """Reject ranges that cannot be scored.

    Raises:
        ConfigurationError: For a negative or inverted budget or bedroom range.
    """
    budget = profile.budget
    if budget is not None:
        if budget.minimum < 0.0 or budget.maximum < 0.0:
            raise ConfigurationError("budget bounds must be non-negative")
        if budget.minimum > budget.maximum:
            raise ConfigurationError("budget minimum exceeds maximum")
    if (
        profile.min_bedrooms is not None
        and profile.max_bedrooms is not None
        and profile.min_bedrooms > profile.max_bedrooms
    ):
        raise ConfigurationError("min_bedrooms exceeds max_bedrooms")


def score(
    profile: PreferenceProfile,
    candidate: Candidate,
    weights: Mapping[Criterion, float] | WeightTable | None = None,
    thresholds: TierThresholds = DEFAULT_TIER_THRESHOLDS,
) -> MatchResult:
    """Score a candidate against a preference profile as a percentage match.

    Args:
        profile: The user's preferences.
        candidate: The property to score.
        weights: Explicit weights; when omitted, ``profile.weights`` applies, and
            when that is also ``None`` the default weight table applies.
        thresholds: Percentage cut-offs for the result tier.

    Returns:
        MatchResult with a score in 0–100, a tier, a "<n>% Match" label and up
        to three reasons.

    Raises:
        ConfigurationError: On negative, non-finite or all-zero weight overrides,
            or an invalid budget/bedroom range.
    """
    validate_profile(profile)
    table = resolve_weights(weights if weights is not None else profile.weights)
    criteria = score_criteria(profile, candidate, table)

    weighted = sum(item.contribution for item in criteria)
    total = round(100.0 * weighted / table.total, 2)
    total = max(0.0, min(100.0, total))

    return MatchResult(
        candidate_id=candidate.candidate_id,
        score=total,
        tier=thresholds.tier_for(total),
        label=f"{round(total)}% Match",
        top_reasons=top_reasons(criteria),
    )
