"""Pydantic models and node types used across the project."""

from __future__ import annotations

from quickoutline.models.document import Position, Range, TextLine
from quickoutline.models.outline import MatchNode, OutlineNode, SymbolNode
from quickoutline.models.query import FilterAndText, KindFilter, NoQuery, Query, TextOnly
from quickoutline.models.search import MatchedRange, ParsedToken
from quickoutline.models.symbols import SymbolInfo, SymbolKind

__all__ = [
    "FilterAndText",
    "KindFilter",
    "MatchNode",
    "MatchedRange",
    "NoQuery",
    "OutlineNode",
    "ParsedToken",
    "Position",
    "Query",
    "Range",
    "SymbolInfo",
    "SymbolKind",
    "SymbolNode",
    "TextLine",
    "TextOnly",
]
