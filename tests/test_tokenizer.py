"""Tests for the query tokenizer."""

from __future__ import annotations

from quickoutline.models.search import ParsedToken
from quickoutline.search.tokenizer import tokenize


def test_tokenize_blank_input_yields_no_tokens() -> None:
    """It should return an empty list for empty or whitespace-only input."""

    assert tokenize("") == []
    assert tokenize("   \t ") == []


def test_tokenize_splits_on_any_whitespace() -> None:
    """It should drop empty fragments between repeated separators."""

    tokens = tokenize("  foo \t bar  ")
    assert [t.pattern for t in tokens] == ["foo", "bar"]


def test_tokenize_negation_and_regex_markers() -> None:
    """It should strip only the negation marker and keep regex delimiters."""

    assert tokenize("!foo /ab+c/i !/x$/") == [
        ParsedToken(pattern="foo", negate=True),
        ParsedToken(pattern="/ab+c/i", is_regex=True),
        ParsedToken(pattern="/x$/", is_regex=True, negate=True),
    ]


def test_tokenize_case_sensitivity_from_raw_fragment() -> None:
    """It should mark a token case sensitive when the typed fragment has an upper-case letter."""

    lower, upper, negated, regex = tokenize("parse Parse !Parse /A/")
    assert lower.case_sensitive is False
    assert upper.case_sensitive is True
    assert negated.case_sensitive is True and negated.negate is True
    assert regex.case_sensitive is True and regex.is_regex is True


def test_tokenize_slash_after_text_is_not_regex() -> None:
    """It should only treat a leading slash as a regex marker."""

    (token,) = tokenize("a/b/")
    assert token.is_regex is False
