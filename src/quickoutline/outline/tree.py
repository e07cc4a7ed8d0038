"""Outline tree: construction, traversal and bulk flag changes."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator

from quickoutline.logging import get_logger
from quickoutline.models.document import TextLine
from quickoutline.models.outline import MatchNode, OutlineNode, SymbolNode
from quickoutline.models.search import MatchedRange
from quickoutline.models.symbols import SymbolInfo, SymbolKind

logger = get_logger(__name__)


def _start_key(symbol: SymbolInfo) -> tuple[int, int]:
    return symbol.range.start.key()


def _node_line(node: OutlineNode) -> int:
    if node.ty == "symbol":
        return node.start_line
    return node.line_number


class OutlineTree:
    """A forest of outline nodes sorted by start position."""

    def __init__(self, roots: list[SymbolNode]) -> None:
        self._roots = roots

    @classmethod
    def build(cls, forest: Iterable[SymbolInfo]) -> OutlineTree:
        """Build the tree from a symbol forest, sorting every level by start position."""

        roots = [cls._build_node(symbol, parent=None) for symbol in sorted(forest, key=_start_key)]
        tree = cls(roots)
        logger.debug("Built outline with %d roots", len(roots))
        return tree

    @classmethod
    def _build_node(cls, symbol: SymbolInfo, parent: SymbolNode | None) -> SymbolNode:
        node = SymbolNode(
            name=symbol.name,
            kind=symbol.kind,
            range=symbol.range,
            detail=symbol.detail,
        )
        if parent is not None:
            parent.adopt(node)
        for child in sorted(symbol.children, key=_start_key):
            cls._build_node(child, parent=node)
        return node

    @property
    def roots(self) -> list[SymbolNode]:
        return self._roots

    # Traversal

    def preorder_all(self) -> Iterator[OutlineNode]:
        """Yield every node in preorder, ignoring hidden and expanded flags."""

        return self.descendants(None)

    def descendants(self, node: OutlineNode | None) -> Iterator[OutlineNode]:
        """Yield the descendants of `node` in preorder (all nodes for None)."""

        stack: list[OutlineNode] = list(reversed(self._roots if node is None else node.children))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def symbols(self) -> Iterator[SymbolNode]:
        for node in self.preorder_all():
            if node.ty == "symbol":
                yield node

    def flatten_visible(self) -> list[OutlineNode]:
        """Return the on-screen order: preorder, skipping hidden nodes and collapsed subtrees."""

        out: list[OutlineNode] = []
        stack: list[OutlineNode] = list(reversed(self._roots))
        while stack:
            node = stack.pop()
            if node.hidden:
                continue
            out.append(node)
            if node.expanded:
                stack.extend(reversed(node.children))
        return out

    # Match insertion

    def insert_match(
        self,
        match: MatchedRange,
        line: TextLine,
        kind_filter: frozenset[SymbolKind] | None = None,
    ) -> bool:
        """Attach a matched line to the outline.

        Each root gets one attempt. The deepest symbol starting on the line is marked as a
        result; otherwise the innermost symbol whose range contains the line receives a
        new match leaf. Every ancestor on the way is revealed and expanded.

        Returns:
            True when at least one root accepted the match.
        """

        accepted = False
        for root in self._roots:
            if self._insert_into(root, match, line, kind_filter):
                accepted = True
        return accepted

    def _insert_into(
        self,
        node: SymbolNode,
        match: MatchedRange,
        line: TextLine,
        kind_filter: frozenset[SymbolKind] | None,
    ) -> bool:
        passes_filter = kind_filter is None or node.kind in kind_filter

        if passes_filter and line.line_number == node.start_line:
            # The line is the symbol itself; this overrides any earlier state.
            node.hidden = False
            node.is_search_result = True
            return True

        for child in node.children:
            if child.ty == "symbol" and self._insert_into(child, match, line, kind_filter):
                node.hidden = False
                node.expanded = True
                return True

        if passes_filter and node.range.contains(line.range):
            node.hidden = False
            node.expanded = True
            self._add_match_leaf(node, MatchNode(line=line, match=match))
            return True

        return False

    @staticmethod
    def _add_match_leaf(parent: SymbolNode, leaf: MatchNode) -> None:
        # keep children ordered by line
        index = len(parent.children)
        for i, child in enumerate(parent.children):
            if _node_line(child) > leaf.line_number:
                index = i
                break
        parent.adopt(leaf, index)

    def clear_matches(self) -> None:
        """Drop every match leaf and reset all result markers."""

        for node in list(self.symbols()):
            node.is_search_result = False
            node.children = [child for child in node.children if child.ty != "line"]

    # Bulk flags

    def hide_all(self) -> None:
        for node in self.preorder_all():
            node.hidden = True
            node.expanded = False

    def reveal_all(self) -> None:
        for node in self.preorder_all():
            node.hidden = False
            node.expanded = False

    def set_all_expanded(self, expanded: bool) -> None:
        for node in self.preorder_all():
            node.expanded = expanded

    def propagate_to_ancestors(self, node: OutlineNode, fn: Callable[[SymbolNode], None]) -> None:
        parent = node.parent
        while parent is not None:
            fn(parent)
            parent = parent.parent

    def reveal_ancestors(self, node: OutlineNode) -> None:
        """Make the chain from the roots down to `node` visible."""

        def _reveal(ancestor: SymbolNode) -> None:
            ancestor.hidden = False
            ancestor.expanded = True

        self.propagate_to_ancestors(node, _reveal)

    def mark_result(self, node: SymbolNode) -> None:
        node.hidden = False
        node.is_search_result = True
        self.reveal_ancestors(node)
