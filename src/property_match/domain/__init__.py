"""Domain modules for property matching."""

from .location_matching import BestFieldPolicy, classify, location_score
from .models import Candidate, LocationFields, MatchResult, MatchTier, PreferenceProfile
from .ranking import rank
from .recommendation import score

__all__ = [
    "BestFieldPolicy",
    "Candidate",
    "LocationFields",
    "MatchResult",
    "MatchTier",
    "PreferenceProfile",
    "classify",
    "location_score",
    "rank",
    "score",
]
