"""Query classification.

A raw query string is one of::

    query       := "" | filterToken | filterToken WS+ text | text
    filterToken := SENTINEL letter+     ; letter in {f,c,s,o,e,t}, each used at most once

Parsing never fails: an invalid filter token is simply treated as text.
"""

from __future__ import annotations

import re

from quickoutline.logging import get_logger
from quickoutline.models.query import FilterAndText, KindFilter, NoQuery, Query, TextOnly
from quickoutline.models.symbols import SymbolKind
from quickoutline.search.tokenizer import tokenize

logger = get_logger(__name__)

DEFAULT_SENTINEL = "#"

KIND_FILTER_LETTERS: dict[str, frozenset[SymbolKind]] = {
    "f": frozenset({SymbolKind.FUNCTION, SymbolKind.METHOD}),
    "c": frozenset({SymbolKind.CLASS, SymbolKind.PROPERTY}),
    "s": frozenset({SymbolKind.STRUCT, SymbolKind.PROPERTY}),
    "o": frozenset({SymbolKind.OBJECT}),
    "e": frozenset({SymbolKind.ENUM, SymbolKind.ENUM_MEMBER}),
    "t": frozenset(
        {SymbolKind.STRUCT, SymbolKind.CLASS, SymbolKind.INTERFACE, SymbolKind.TYPE_PARAMETER}
    ),
}

_FILTER_AND_TEXT_RE = re.compile(r"(\S+)\s+(\S.*)", re.DOTALL)


def is_kind_filter(token: str, sentinel: str = DEFAULT_SENTINEL) -> bool:
    """Return True when `token` is a sentinel followed by distinct filter letters."""

    token = token.rstrip()
    if len(token) <= 1 or not token.startswith(sentinel):
        return False

    seen: set[str] = set()
    for letter in token[len(sentinel):]:
        if letter not in KIND_FILTER_LETTERS or letter in seen:
            return False
        seen.add(letter)
    return True


def kinds_for(token: str, sentinel: str = DEFAULT_SENTINEL) -> frozenset[SymbolKind]:
    """Union of the symbol kinds selected by each letter of a filter token."""

    kinds: set[SymbolKind] = set()
    for letter in token.rstrip()[len(sentinel):]:
        kinds |= KIND_FILTER_LETTERS.get(letter, frozenset())
    return frozenset(kinds)


def strip_sentinel(raw: str, sentinel: str = DEFAULT_SENTINEL) -> str:
    return raw[len(sentinel):] if raw.startswith(sentinel) else raw


def parse_query(raw: str, sentinel: str = DEFAULT_SENTINEL) -> Query:
    """Classify a raw query string.

    Args:
        raw: Query text as typed, normally starting with the sentinel.
        sentinel: Query-mode marker character.

    Returns:
        One of :class:`NoQuery`, :class:`KindFilter`, :class:`TextOnly` or
        :class:`FilterAndText`.
    """

    if len(raw) <= 1:
        return NoQuery()

    m = _FILTER_AND_TEXT_RE.match(raw)
    if m and is_kind_filter(m.group(1), sentinel):
        return FilterAndText(
            kinds=kinds_for(m.group(1), sentinel),
            tokens=tuple(tokenize(m.group(2))),
        )

    if is_kind_filter(raw, sentinel):
        return KindFilter(kinds=kinds_for(raw, sentinel))

    if m:
        logger.debug("Leading token %r is not a kind filter, treating query as text", m.group(1))
    return TextOnly(tokens=tuple(tokenize(strip_sentinel(raw, sentinel))))
