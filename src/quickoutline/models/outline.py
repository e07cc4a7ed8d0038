"""Outline node models.

An outline is a forest of two node variants sharing the same flag set:

- :class:`SymbolNode` (``ty == "symbol"``) wraps one structural symbol. It lives for the
  whole session and only ever has its flags changed.
- :class:`MatchNode` (``ty == "line"``) is an ephemeral leaf holding one matched document
  line. It is created during a query pass and dropped on the next one.

Consumers switch on ``ty``. Parents are held through weak references; a node owns its
children only.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Literal

from quickoutline.models.document import Range, TextLine
from quickoutline.models.search import MatchedRange
from quickoutline.models.symbols import SymbolKind


@dataclass(eq=False)
class SymbolNode:
    """A symbol in the outline."""

    name: str
    kind: SymbolKind
    range: Range
    detail: str | None = None
    depth: int = 0

    hidden: bool = False
    expanded: bool = False
    is_search_result: bool = False

    children: list[OutlineNode] = field(default_factory=list, repr=False)
    _parent_ref: weakref.ReferenceType[SymbolNode] | None = field(default=None, repr=False)

    ty: Literal["symbol"] = field(default="symbol", init=False)

    @property
    def parent(self) -> SymbolNode | None:
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def start_line(self) -> int:
        return self.range.start.line

    def adopt(self, child: OutlineNode, index: int | None = None) -> None:
        """Insert `child` (appended by default) and point its back-reference at this node."""

        child._parent_ref = weakref.ref(self)
        child.depth = self.depth + 1
        if index is None:
            self.children.append(child)
        else:
            self.children.insert(index, child)


@dataclass(eq=False)
class MatchNode:
    """A matched document line shown under its enclosing symbol."""

    line: TextLine
    match: MatchedRange
    depth: int = 0

    hidden: bool = False
    expanded: bool = False
    # A match leaf is a search result by definition.
    is_search_result: bool = True

    _parent_ref: weakref.ReferenceType[SymbolNode] | None = field(default=None, repr=False)

    ty: Literal["line"] = field(default="line", init=False)

    @property
    def parent(self) -> SymbolNode | None:
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def children(self) -> tuple[()]:
        return ()

    @property
    def line_number(self) -> int:
        return self.line.line_number


OutlineNode = SymbolNode | MatchNode
