"""Parsed query types."""

from __future__ import annotations

from dataclasses import dataclass

from quickoutline.models.search import ParsedToken
from quickoutline.models.symbols import SymbolKind


@dataclass(frozen=True)
class NoQuery:
    """Nothing but the sentinel (or nothing at all) was typed."""


@dataclass(frozen=True)
class KindFilter:
    """Only a kind filter such as ``#ft``."""

    kinds: frozenset[SymbolKind]


@dataclass(frozen=True)
class TextOnly:
    """Plain text tokens without a kind filter."""

    tokens: tuple[ParsedToken, ...]


@dataclass(frozen=True)
class FilterAndText:
    """A kind filter followed by text tokens, e.g. ``#f parse !test``."""

    kinds: frozenset[SymbolKind]
    tokens: tuple[ParsedToken, ...]


Query = NoQuery | KindFilter | TextOnly | FilterAndText
