"""Tests for weight tables and tier thresholds."""

from __future__ import annotations

import math

import pytest

from property_match.domain.models import Criterion, MatchTier
from property_match.domain.weights import (
    DEFAULT_WEIGHT_TABLE,
    TierThresholds,
    build_weight_table,
    resolve_weights,
    validate_tier_thresholds,
)
from property_match.exceptions import ConfigurationError


def test_default_table_weights_sum_to_one() -> None:
    assert DEFAULT_WEIGHT_TABLE.total == pytest.approx(1.0)
    assert DEFAULT_WEIGHT_TABLE.weight(Criterion.LIFESTYLE) == 0.0


def test_build_weight_table_fills_missing_criteria_with_zero() -> None:
    table = build_weight_table("custom", {Criterion.PRICE: 2.0})

    assert table.weight(Criterion.PRICE) == 2.0
    assert table.weight(Criterion.LOCATION) == 0.0
    assert table.total == 2.0


def test_build_weight_table_accepts_criterion_names() -> None:
    table = build_weight_table("custom", {"location": 1.0})  # type: ignore[dict-item]

    assert table.weight(Criterion.LOCATION) == 1.0


def test_build_weight_table_rejects_unknown_criterion() -> None:
    with pytest.raises(ConfigurationError, match="unknown criterion 'view'"):
        build_weight_table("custom", {"view": 1.0})  # type: ignore[dict-item]


@pytest.mark.parametrize("value", [-0.1, math.inf, math.nan])
def test_build_weight_table_rejects_invalid_values(value: float) -> None:
    with pytest.raises(ConfigurationError):
        build_weight_table("custom", {Criterion.LOCATION: 1.0, Criterion.PRICE: value})


def test_build_weight_table_rejects_all_zero() -> None:
    with pytest.raises(ConfigurationError, match="at least one criterion weight must be positive"):
        build_weight_table("custom", {Criterion.LOCATION: 0.0})


def test_resolve_weights_uses_default_only_without_override() -> None:
    assert resolve_weights(None) is DEFAULT_WEIGHT_TABLE
    assert resolve_weights({Criterion.TYPE: 1.0}).name == "custom"


def test_resolve_weights_revalidates_tables() -> None:
    table = build_weight_table("budget", {Criterion.PRICE: 1.0})

    assert resolve_weights(table).name == "budget"


def test_tier_for_boundaries() -> None:
    thresholds = TierThresholds()

    assert thresholds.tier_for(90.0) == MatchTier.EXACT
    assert thresholds.tier_for(89.99) == MatchTier.HIGH
    assert thresholds.tier_for(70.0) == MatchTier.HIGH
    assert thresholds.tier_for(40.0) == MatchTier.PARTIAL
    assert thresholds.tier_for(0.01) == MatchTier.SIMILAR
    assert thresholds.tier_for(0.0) == MatchTier.NONE


def test_validate_tier_thresholds_rejects_unordered_values() -> None:
    with pytest.raises(ConfigurationError, match="strictly descending"):
        validate_tier_thresholds(TierThresholds(exact=70.0, high=70.0, partial=40.0))


def test_validate_tier_thresholds_rejects_out_of_range_values() -> None:
    with pytest.raises(ConfigurationError, match="between 0 and 100"):
        validate_tier_thresholds(TierThresholds(exact=120.0))
