"""Tests for weighted preference scoring."""

from __future__ import annotations

import math

import pytest

from property_match.domain.models import (
    BudgetRange,
    Candidate,
    Criterion,
    LocationFields,
    MatchTier,
    PreferenceProfile,
)
from property_match.domain.recommendation import (
    score,
    score_amenities,
    score_bedrooms,
    score_lifestyle,
    score_location,
    score_price,
    score_type,
)
from property_match.domain.weights import TierThresholds
from property_match.exceptions import ConfigurationError
from tests.support.candidates import make_budget_profile, make_candidate


def _lagos_flat() -> Candidate:
    return make_candidate(
        "p-1",
        address="24 Marina Road, Lagos Island",
        city="Lagos",
        state="Lagos",
        price=1200.0,
        property_type="apartment",
        bedroom_count=2,
        amenities=("WiFi", "Parking"),
    )


class TestScore:
    """End-to-end behaviour of the recommendation scorer."""

    def test_budget_hit_without_location_signal_scores_half(self) -> None:
        profile = make_budget_profile(
            preferred_locations=("Kano",),
            weights={Criterion.LOCATION: 1.0, Criterion.PRICE: 1.0},
        )

        result = score(profile, _lagos_flat())

        assert result.score == 50.0
        assert result.label == "50% Match"
        assert result.tier == MatchTier.PARTIAL
        assert result.top_reasons == ("Within your budget range",)

    def test_perfect_candidate_scores_full_marks(self) -> None:
        profile = PreferenceProfile(
            budget=BudgetRange(minimum=1000.0, maximum=1500.0),
            desired_types=frozenset({"Apartment"}),
            min_bedrooms=2,
            max_bedrooms=2,
            desired_amenities=frozenset({"wifi", "parking"}),
            preferred_locations=("lagos",),
        )

        result = score(profile, _lagos_flat())

        assert result.score == 100.0
        assert result.tier == MatchTier.EXACT
        assert result.label == "100% Match"
        assert result.top_reasons == (
            "Matches your preferred location",
            "Within your budget range",
            "Has 2 of your 2 preferred amenities",
        )

    def test_explicit_weights_argument_overrides_profile_weights(self) -> None:
        profile = make_budget_profile(weights={Criterion.LOCATION: 1.0})

        result = score(profile, _lagos_flat(), weights={Criterion.PRICE: 1.0})

        assert result.score == 100.0

    def test_score_is_bounded_and_rounded(self) -> None:
        profile = make_budget_profile(
            desired_amenities=frozenset({"wifi", "pool", "gym"}),
            preferred_locations=("Abuja",),
        )

        result = score(profile, _lagos_flat())

        assert 0.0 <= result.score <= 100.0
        assert result.score == round(result.score, 2)

    def test_custom_thresholds_change_tier(self) -> None:
        profile = make_budget_profile(
            preferred_locations=("Kano",),
            weights={Criterion.LOCATION: 1.0, Criterion.PRICE: 1.0},
        )

        result = score(
            profile,
            _lagos_flat(),
            thresholds=TierThresholds(exact=95.0, high=80.0, partial=60.0),
        )

        assert result.tier == MatchTier.SIMILAR

    def test_zero_reasons_are_never_listed(self) -> None:
        profile = make_budget_profile(desired_types=frozenset({"house"}))

        result = score(profile, _lagos_flat())

        assert not any("house" in reason for reason in result.top_reasons)
        assert not any("apartment" in reason for reason in result.top_reasons)

    def test_open_preferences_are_never_listed_as_reasons(self) -> None:
        profile = PreferenceProfile(preferred_locations=("Abuja",))
        candidate = make_candidate(
            "p-1", city="Lagos", price=99999.0, property_type="apartment", bedroom_count=9
        )

        result = score(profile, candidate)

        assert result.score == 50.0
        assert result.top_reasons == ()

    def test_location_only_profile_lists_location_reason_alone(self) -> None:
        profile = PreferenceProfile(preferred_locations=("Lagos",))

        result = score(profile, _lagos_flat())

        assert result.top_reasons == ("Matches your preferred location",)

    def test_score_is_deterministic(self) -> None:
        profile = make_budget_profile(preferred_locations=("Lagos",))

        assert score(profile, _lagos_flat()) == score(profile, _lagos_flat())


class TestConfigurationErrors:
    """Malformed configuration is rejected instead of silently defaulted."""

    @pytest.mark.parametrize(
        "weights",
        [
            {},
            {Criterion.LOCATION: 0.0, Criterion.PRICE: 0.0},
            {Criterion.LOCATION: -1.0, Criterion.PRICE: 2.0},
            {Criterion.LOCATION: math.nan},
        ],
    )
    def test_invalid_weight_overrides_raise(self, weights: dict[Criterion, float]) -> None:
        profile = PreferenceProfile(weights=weights)

        with pytest.raises(ConfigurationError):
            score(profile, _lagos_flat())

    def test_inverted_budget_raises(self) -> None:
        profile = PreferenceProfile(budget=BudgetRange(minimum=2000.0, maximum=1000.0))

        with pytest.raises(ConfigurationError, match="budget minimum exceeds maximum"):
            score(profile, _lagos_flat())

    def test_negative_budget_raises(self) -> None:
        profile = PreferenceProfile(budget=BudgetRange(minimum=-1.0, maximum=1000.0))

        with pytest.raises(ConfigurationError):
            score(profile, _lagos_flat())

    def test_inverted_bedroom_range_raises(self) -> None:
        profile = PreferenceProfile(min_bedrooms=4, max_bedrooms=2)

        with pytest.raises(ConfigurationError, match="min_bedrooms exceeds max_bedrooms"):
            score(profile, _lagos_flat())


class TestSubScores:
    """Individual criterion sub-scores."""

    def test_location_exact_city_preference(self) -> None:
        profile = PreferenceProfile(preferred_locations=("LAGOS",))

        assert score_location(profile, _lagos_flat()) == 1.0

    def test_location_partial_preference_uses_classifier_score(self) -> None:
        profile = PreferenceProfile(preferred_locations=("lek",))
        candidate = Candidate(candidate_id="p-2", location=LocationFields(city="Lekki"))

        assert score_location(profile, candidate) == 0.75

    def test_location_without_preferences_is_zero(self) -> None:
        assert score_location(PreferenceProfile(), _lagos_flat()) == 0.0

    def test_price_inside_budget(self) -> None:
        assert score_price(BudgetRange(1000.0, 1500.0), 1500.0) == 1.0

    def test_price_above_budget_decays(self) -> None:
        assert score_price(BudgetRange(1000.0, 1500.0), 1800.0) == pytest.approx(0.6)

    def test_price_below_budget_decays(self) -> None:
        assert score_price(BudgetRange(1000.0, 1500.0), 600.0) == pytest.approx(0.2)

    def test_price_far_outside_budget_is_zero(self) -> None:
        assert score_price(BudgetRange(1000.0, 1500.0), 400.0) == 0.0

    def test_price_without_budget_is_full(self) -> None:
        assert score_price(None, None) == 1.0

    def test_missing_price_with_budget_is_zero(self) -> None:
        assert score_price(BudgetRange(1000.0, 1500.0), None) == 0.0

    def test_type_without_preference_is_full(self) -> None:
        assert score_type(frozenset(), "house") == 1.0

    def test_type_mismatch_is_zero(self) -> None:
        assert score_type(frozenset({"house"}), "Apartment") == 0.0

    def test_bedrooms_penalised_per_room_outside_range(self) -> None:
        assert score_bedrooms(2, 3, 5) == pytest.approx(0.6)
        assert score_bedrooms(4, None, 1) == pytest.approx(0.4)
        assert score_bedrooms(None, None, 7) == 1.0

    def test_amenities_fraction_of_desired(self) -> None:
        assert score_amenities(frozenset({"wifi", "pool"}), frozenset({"WiFi"})) == 0.5
        assert score_amenities(frozenset(), frozenset({"wifi"})) == 0.0

    def test_lifestyle_family_needs_three_bedrooms(self) -> None:
        house = make_candidate("p-2", property_type="house", bedroom_count=4)
        flat = make_candidate("p-3", property_type="apartment", bedroom_count=2)

        assert score_lifestyle("family", house) == 1.0
        assert score_lifestyle("family", flat) == 0.0

    def test_lifestyle_luxury_and_minimalist(self) -> None:
        assert score_lifestyle("luxury", make_candidate(property_type="Penthouse")) == 1.0
        assert score_lifestyle("minimalist", make_candidate(property_type="studio")) == 1.0
        assert score_lifestyle(None, make_candidate(property_type="studio")) == 0.0
