"""Domain model for criterion weight tables and tier thresholds.

Weight tables are explicit values passed into the scorer, so several profiles can
be scored concurrently with different tables.

Usage example:
    from property_match.domain.models import Criterion
    from property_match.domain.weights import DEFAULT_WEIGHT_TABLE, resolve_weights

    weights = resolve_weights({Criterion.LOCATION: 1.0, Criterion.PRICE: 1.0})
    assert weights.total == 2.0
    assert DEFAULT_WEIGHT_TABLE.weight(Criterion.LOCATION) == 0.30
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..exceptions import ConfigurationError
from .models import Criterion, MatchTier


@dataclass(frozen=True)
class WeightTable:
    """Non-negative weight per criterion with a positive total."""

    name: str
    weights: MappingProxyType[Criterion, float]

    def weight(self, criterion: Criterion) -> float:
        return self.weights.get(criterion, 0.0)

    @property
    def total(self) -> float:
        return sum(self.weights.values())


@dataclass(frozen=True)
class TierThresholds:
    """Score cut-offs that map a recommendation percentage onto a tier."""

    exact: float = 90.0
    high: float = 70.0
    partial: float = 40.0

    def tier_for(self, score: float) -> MatchTier:
        if score >= self.exact:
            return MatchTier.EXACT
        if score >= self.high:
            return MatchTier.HIGH
        if score >= self.partial:
            return MatchTier.PARTIAL
        if score > 0.0:
            return MatchTier.SIMILAR
        return MatchTier.NONE


DEFAULT_WEIGHTS: Mapping[Criterion, float] = MappingProxyType(
    {
        Criterion.LOCATION: 0.30,
        Criterion.PRICE: 0.25,
        Criterion.TYPE: 0.15,
        Criterion.BEDROOMS: 0.10,
        Criterion.AMENITIES: 0.20,
        Criterion.LIFESTYLE: 0.0,
    }
)

DEFAULT_WEIGHT_TABLE = WeightTable(name="default", weights=MappingProxyType(dict(DEFAULT_WEIGHTS)))
DEFAULT_TIER_THRESHOLDS = TierThresholds()


def build_weight_table(name: str, weights: Mapping[Criterion, float]) -> WeightTable:
    """Validate an explicit weight mapping and freeze it.

    Criteria missing from ``weights`` get weight 0.

    Raises:
        ConfigurationError: On unknown criteria, negative or non-finite weights,
            or when every weight is zero.
    """
    cleaned: dict[Criterion, float] = {criterion: 0.0 for criterion in Criterion}
    for key, value in weights.items():
        try:
            criterion = Criterion(key)
        except ValueError as exc:
            raise ConfigurationError(f"unknown criterion '{key}'") from exc
        weight = float(value)
        if not math.isfinite(weight):
            raise ConfigurationError(f"weight for '{criterion}' must be finite")
        if weight < 0.0:
            raise ConfigurationError(f"weight for '{criterion}' must be non-negative")
        cleaned[criterion] = weight

    if sum(cleaned.values()) <= 0.0:
        raise ConfigurationError("at least one criterion weight must be positive")
    return WeightTable(name=name, weights=MappingProxyType(cleaned))


def resolve_weights(
    override: Mapping[Criterion, float] | WeightTable | None,
    default: WeightTable = DEFAULT_WEIGHT_TABLE,
) -> WeightTable:
    """Return the table to score with: ``default`` only when no override was given."""
    if override is None:
        return default
    if isinstance(override, WeightTable):
        return build_weight_table(override.name, override.weights)
    return build_weight_table("custom", override)


def validate_tier_thresholds(thresholds: TierThresholds) -> TierThresholds:
    """Check thresholds are within 0–100 and strictly descending."""
    values = (thresholds.exact, thresholds.high, thresholds.partial)
    if any(not 0.0 <= value <= 100.0 for value in values):
        raise ConfigurationError("tier thresholds must be between 0 and 100")
    if not thresholds.exact > thresholds.high > thresholds.partial:
        raise ConfigurationError("tier thresholds must be strictly descending")
    return thresholds
