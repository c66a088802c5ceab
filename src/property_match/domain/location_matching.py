"""Location match classification and additive location relevance.

Two deliberately different algorithms live here:

- ``classify`` picks the single best rule and returns a display tier, score and
  badge label.
- ``location_score`` accumulates every signal that fires and is used only as a
  sort key, so several weak signals can outrank one stronger rule.

They are allowed to disagree.

Usage example:
    from property_match.domain.location_matching import classify, location_score
    from property_match.domain.models import LocationFields

    location = LocationFields(address="24 Marina Road, Lagos Island", city="Lagos")
    result = classify("24 Marina Road", location, candidate_id="p-1")
    assert (result.tier, result.score, result.label) == ("high", 85.0, "Address Match")
    assert location_score("lagos", location) > 0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from ..normalization import normalize, tokenize
from .models import LocationFields, MatchResult, MatchTier

EXACT_ADDRESS_LABEL = "Exact Address Match"
EXACT_LOCATION_LABEL = "Exact Location Match"
ADDRESS_LABEL = "Address Match"
CITY_LABEL = "City Match"
STATE_LABEL = "State Match"
AREA_LABEL = "Area Match"

WORD_MATCH_BASE_SCORE = 30.0
WORD_MATCH_STEP = 10.0
WORD_MATCH_CAP = 70.0
AREA_SCORE = 10.0

# Additive relevance bonuses for location_score
EXACT_ADDRESS_BONUS = 100.0
EXACT_CITY_BONUS = 90.0
EXACT_STATE_BONUS = 80.0
ADDRESS_CONTAINS_BONUS = 70.0
ADDRESS_PREFIX_BONUS = 60.0
CITY_PREFIX_BONUS = 50.0
STATE_PREFIX_BONUS = 40.0
CITY_CONTAINS_BONUS = 30.0
STATE_CONTAINS_BONUS = 20.0
COUNTRY_CONTAINS_BONUS = 10.0
ADDRESS_TOKEN_BONUS = 15.0
CITY_TOKEN_BONUS = 10.0
STATE_TOKEN_BONUS = 5.0


class LocationRule(StrEnum):
    """Which classification rule produced a match."""

    EMPTY_QUERY = "empty_query"
    EXACT_ADDRESS = "exact_address"
    EXACT_LOCATION = "exact_location"
    ADDRESS_CONTAINS = "address_contains"
    ADDRESS_PREFIX = "address_prefix"
    CITY = "city"
    STATE = "state"
    WORDS = "words"
    AREA = "area"


class BestFieldPolicy(StrEnum):
    """How the word fallback names the field in its "<Field> Similar" label.

    ``first_match`` uses the field hit by the earliest matching token.
    ``address_priority`` uses Address whenever any token hit the address, and
    otherwise the earliest matching token's field.
    """

    FIRST_MATCH = "first_match"
    ADDRESS_PRIORITY = "address_priority"


@dataclass(frozen=True)
class LocationMatch:
    """Outcome of the rule cascade, before it is wrapped in a MatchResult."""

    rule: LocationRule
    tier: MatchTier
    score: float
    label: str

    @property
    def is_signal(self) -> bool:
        """False for the empty query and the residual area hint."""
        return self.rule not in (LocationRule.EMPTY_QUERY, LocationRule.AREA)


@dataclass(frozen=True)
class _NormalizedLocation:
    address: str
    city: str
    state: str
    country: str

    @classmethod
    def of(cls, location: LocationFields) -> _NormalizedLocation:
        return cls(
            address=normalize(location.address),
            city=normalize(location.city),
            state=normalize(location.state),
            country=normalize(location.country),
        )


def _contains(field_value: str, needle: str) -> bool:
    return bool(field_value) and needle in field_value


def _starts_with(field_value: str, needle: str) -> bool:
    return bool(field_value) and field_value.startswith(needle)


_NO_MATCH = LocationMatch(LocationRule.EMPTY_QUERY, MatchTier.NONE, 0.0, "")


def match_location(
    query: str | None,
    location: LocationFields,
    policy: BestFieldPolicy = BestFieldPolicy.FIRST_MATCH,
) -> LocationMatch:
    """Run the classification rules in precedence order; the first hit wins."""
    search = normalize(query)
    if not search:
        return _NO_MATCH

    loc = _NormalizedLocation.of(location)

    if loc.address and loc.address == search:
        return LocationMatch(LocationRule.EXACT_ADDRESS, MatchTier.EXACT, 100.0, EXACT_ADDRESS_LABEL)
    if (loc.city and loc.city == search) or (loc.state and loc.state == search):
        return LocationMatch(LocationRule.EXACT_LOCATION, MatchTier.EXACT, 95.0, EXACT_LOCATION_LABEL)
    # Containment is checked before prefix so true substrings score 85, not 80.
    if _contains(loc.address, search):
        return LocationMatch(LocationRule.ADDRESS_CONTAINS, MatchTier.HIGH, 85.0, ADDRESS_LABEL)
    if _starts_with(loc.address, search):
        return LocationMatch(LocationRule.ADDRESS_PREFIX, MatchTier.HIGH, 80.0, ADDRESS_LABEL)
    if _contains(loc.city, search) or _starts_with(loc.city, search):
        return LocationMatch(LocationRule.CITY, MatchTier.HIGH, 75.0, CITY_LABEL)
    if _contains(loc.state, search) or _starts_with(loc.state, search):
        return LocationMatch(LocationRule.STATE, MatchTier.PARTIAL, 60.0, STATE_LABEL)

    words = _match_words(tokenize(search), loc, policy)
    if words is not None:
        return words

    return LocationMatch(LocationRule.AREA, MatchTier.SIMILAR, AREA_SCORE, AREA_LABEL)


def _match_words(
    tokens: tuple[str, ...],
    loc: _NormalizedLocation,
    policy: BestFieldPolicy,
) -> LocationMatch | None:
    fields = (("Address", loc.address), ("City", loc.city), ("State", loc.state))
    matched_fields: list[str] = []
    for token in tokens:
        for name, value in fields:
            if _contains(value, token):
                matched_fields.append(name)
                break

    word_matches = len(matched_fields)
    if word_matches == 0:
        return None

    if policy is BestFieldPolicy.ADDRESS_PRIORITY and "Address" in matched_fields:
        best_field = "Address"
    else:
        best_field = matched_fields[0]

    score = min(WORD_MATCH_CAP, WORD_MATCH_BASE_SCORE + word_matches * WORD_MATCH_STEP)
    tier = MatchTier.PARTIAL if word_matches >= math.ceil(len(tokens) / 2) else MatchTier.SIMILAR
    return LocationMatch(LocationRule.WORDS, tier, score, f"{best_field} Similar")


def classify(
    query: str | None,
    location: LocationFields,
    candidate_id: str = "",
    policy: BestFieldPolicy = BestFieldPolicy.FIRST_MATCH,
) -> MatchResult:
    """Classify how well a free-text query matches a property's location.

    Never raises. An empty query yields tier ``none`` with score 0, which callers
    should not display. Any non-empty query yields at least the weak "Area Match".
    """
    match = match_location(query, location, policy)
    return MatchResult(
        candidate_id=candidate_id,
        score=match.score,
        tier=match.tier,
        label=match.label,
    )


def location_score(query: str | None, location: LocationFields) -> float:
    """Additive relevance of a location to a query, for use as a sort key only."""
    search = normalize(query)
    if not search:
        return 0.0

    loc = _NormalizedLocation.of(location)
    score = 0.0

    # Exact matches
    if loc.address and loc.address == search:
        score += EXACT_ADDRESS_BONUS
    if loc.city and loc.city == search:
        score += EXACT_CITY_BONUS
    if loc.state and loc.state == search:
        score += EXACT_STATE_BONUS

    if _contains(loc.address, search):
        score += ADDRESS_CONTAINS_BONUS

    # Prefix matches
    if _starts_with(loc.address, search):
        score += ADDRESS_PREFIX_BONUS
    if _starts_with(loc.city, search):
        score += CITY_PREFIX_BONUS
    if _starts_with(loc.state, search):
        score += STATE_PREFIX_BONUS

    # Contains matches
    if _contains(loc.city, search):
        score += CITY_CONTAINS_BONUS
    if _contains(loc.state, search):
        score += STATE_CONTAINS_BONUS
    if _contains(loc.country, search):
        score += COUNTRY_CONTAINS_BONUS

    for token in tokenize(search):
        if _contains(loc.address, token):
            score += ADDRESS_TOKEN_BONUS
        if _contains(loc.city, token):
            score += CITY_TOKEN_BONUS
        if _contains(loc.state, token):
            score += STATE_TOKEN_BONUS

    return score


def matches_location_search(query: str | None, location: LocationFields) -> bool:
    """Return True when a listing should appear in results for a location search.

    A listing qualifies when the combined location text contains the query, any
    single field contains it, or any significant query word appears in a field.
    An empty query matches everything.
    """
    search = normalize(query)
    if not search:
        return True

    loc = _NormalizedLocation.of(location)
    field_values = (loc.address, loc.city, loc.state, loc.country)
    full_location = " ".join(value for value in field_values if value)

    if search in full_location:
        return True
    if any(_contains(value, search) for value in field_values):
        return True
    return any(
        _contains(value, token) for token in tokenize(search) for value in field_values
    )
