"""Query grammar: tokenizer, parser and line matcher."""

from __future__ import annotations

from quickoutline.search.matcher import match_line, search_document, search_lines
from quickoutline.search.parser import is_kind_filter, kinds_for, parse_query
from quickoutline.search.tokenizer import tokenize

__all__ = [
    "is_kind_filter",
    "kinds_for",
    "match_line",
    "parse_query",
    "search_document",
    "search_lines",
    "tokenize",
]
