"""Value objects shared by the classifier, scorer and ranker.

Usage example:
    from property_match.domain.models import Candidate, LocationFields, PreferenceProfile

    candidate = Candidate(
        candidate_id="p-1",
        location=LocationFields(address="24 Marina Road", city="Lagos", state="Lagos"),
        price=1200.0,
        property_type="apartment",
        bedroom_count=2,
    )
    profile = PreferenceProfile(preferred_locations=("Lagos",))
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class MatchTier(StrEnum):
    """Ordinal match-quality bucket."""

    EXACT = "exact"
    HIGH = "high"
    PARTIAL = "partial"
    SIMILAR = "similar"
    NONE = "none"

    @property
    def rank(self) -> int:
        """Ordinal position, higher is better (exact=4 … none=0)."""
        return _TIER_RANKS[self]


_TIER_RANKS = {
    MatchTier.EXACT: 4,
    MatchTier.HIGH: 3,
    MatchTier.PARTIAL: 2,
    MatchTier.SIMILAR: 1,
    MatchTier.NONE: 0,
}


class Criterion(StrEnum):
    """Weighted criteria of the recommendation scorer, in declaration order."""

    LOCATION = "location"
    PRICE = "price"
    TYPE = "type"
    BEDROOMS = "bedrooms"
    AMENITIES = "amenities"
    LIFESTYLE = "lifestyle"


@dataclass(frozen=True)
class LocationFields:
    """Free-text location of a property; any field may be missing."""

    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class Candidate:
    """A property record being scored. Owned by the caller, never mutated."""

    candidate_id: str
    location: LocationFields = field(default_factory=LocationFields)
    price: float | None = None
    property_type: str = ""
    bedroom_count: int = 0
    bathroom_count: int = 0
    amenities: frozenset[str] = frozenset()
    furnished: bool = False
    available_from: date | None = None
    title: str = ""


@dataclass(frozen=True)
class BudgetRange:
    """Inclusive price range. Validated by the scorer, not on construction."""

    minimum: float
    maximum: float

    def contains(self, price: float) -> bool:
        return self.minimum <= price <= self.maximum


@dataclass(frozen=True)
class PreferenceProfile:
    """Structured preferences from the recommendation wizard.

    ``weights=None`` means "use the default weight table". Any mapping, even an
    empty or all-zero one, is an explicit override and is validated strictly.
    """

    budget: BudgetRange | None = None
    desired_types: frozenset[str] = frozenset()
    min_bedrooms: int | None = None
    max_bedrooms: int | None = None
    desired_amenities: frozenset[str] = frozenset()
    preferred_locations: tuple[str, ...] = ()
    weights: Mapping[Criterion, float] | None = None
    lifestyle: str | None = None
    move_in_by: date | None = None


@dataclass(frozen=True)
class MatchResult:
    """Score and classification of one candidate against one query or profile."""

    candidate_id: str
    score: float  # 0.0–100.0
    tier: MatchTier
    label: str
    top_reasons: tuple[str, ...] = ()
