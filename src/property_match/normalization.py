"""Text normalization for location and attribute matching.

Both the location classifier and the recommendation scorer compare fields through
these helpers so that casing and stray whitespace never decide a match.

Usage example:
    from property_match.normalization import normalize, tokenize

    assert normalize("  Lagos   Island ") == "lagos island"
    assert tokenize("24 Marina Road") == ("marina", "road")
"""

from __future__ import annotations

import re
from collections.abc import Iterable

# Tokens of this length or shorter carry no location signal ("24", "of", "st").
MIN_TOKEN_LENGTH = 3

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """Normalize a field for comparison.

    Transformations:
    1. Lowercase
    2. Collapse internal whitespace runs to a single space
    3. Strip leading/trailing whitespace

    Args:
        text: Raw field value; ``None`` is treated as empty.

    Returns:
        Normalized text, or an empty string for missing input.
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text.lower()).strip()


def tokenize(text: str | None) -> tuple[str, ...]:
    """Split a search phrase into significant words.

    Order and duplicates are preserved: a repeated word counts once per
    occurrence in downstream word matching.

    Args:
        text: Raw search phrase.

    Returns:
        Normalized tokens longer than two characters, left to right.
    """
    normalized = normalize(text)
    if not normalized:
        return ()
    return tuple(word for word in normalized.split(" ") if len(word) >= MIN_TOKEN_LENGTH)


def normalize_set(values: Iterable[str] | None) -> frozenset[str]:
    """Normalize labels (amenities, property types) into a set, dropping blanks."""
    if values is None:
        return frozenset()
    normalized = (normalize(value) for value in values)
    return frozenset(text for text in normalized if text)
