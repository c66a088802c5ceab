"""Tests for field normalization and tokenization."""

from property_match.normalization import normalize, normalize_set, tokenize


def test_normalize_lowercases_and_collapses_whitespace() -> None:
    assert normalize("  Lagos \t  Island\n") == "lagos island"


def test_normalize_treats_missing_as_empty() -> None:
    assert normalize(None) == ""
    assert normalize("   ") == ""


def test_tokenize_drops_short_words_and_keeps_order() -> None:
    assert tokenize("24 Marina Rd of Lagos") == ("marina", "lagos")


def test_tokenize_keeps_duplicates() -> None:
    assert tokenize("Lagos lagos") == ("lagos", "lagos")


def test_tokenize_empty_input() -> None:
    assert tokenize("") == ()
    assert tokenize(None) == ()


def test_normalize_set_drops_blanks() -> None:
    assert normalize_set([" WiFi", "wifi", "", "Parking "]) == frozenset({"wifi", "parking"})
    assert normalize_set(None) == frozenset()
