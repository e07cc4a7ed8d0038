"""Query engine: applies a raw query to the outline tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from quickoutline.backends.protocol import DocumentAccessor
from quickoutline.logging import get_logger
from quickoutline.models.document import Range, TextLine
from quickoutline.models.outline import SymbolNode
from quickoutline.models.query import FilterAndText, KindFilter, NoQuery, Query, TextOnly
from quickoutline.models.search import MatchedRange, ParsedToken
from quickoutline.models.symbols import SymbolKind
from quickoutline.outline.state import SearchMode, SessionState
from quickoutline.outline.tree import OutlineTree
from quickoutline.search.matcher import match_line, search_document
from quickoutline.search.parser import DEFAULT_SENTINEL, parse_query

logger = get_logger(__name__)


class EngineStatus(str, Enum):
    IDLE = "idle"
    FILTERING = "filtering"


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of one query pass."""

    query: Query
    text: str
    rewritten: bool
    result_count: int


class SearchEngine:
    """Runs queries against one outline tree in either symbol or text mode.

    Symbol mode matches symbol names and kinds; text mode matches raw document lines and
    hangs each hit under its innermost enclosing symbol.
    """

    def __init__(
        self,
        tree: OutlineTree,
        document: DocumentAccessor,
        *,
        mode: SearchMode,
        state: SessionState,
        sentinel: str = DEFAULT_SENTINEL,
    ) -> None:
        self.tree = tree
        self.document = document
        self.mode = mode
        self.state = state
        self.sentinel = sentinel
        self._status = EngineStatus.IDLE

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def query_active(self) -> bool:
        return self._status is EngineStatus.FILTERING

    def apply(self, raw: str) -> ApplyResult:
        """Apply a raw query string to the tree.

        Args:
            raw: Query text as currently shown to the user.

        Returns:
            The parsed query, the sentinel-prefixed text and whether it had to be
            rewritten, and the number of nodes flagged as results.
        """

        self.state.set(self.mode, raw)

        text = raw
        rewritten = not raw.startswith(self.sentinel)
        if rewritten:
            text = self.sentinel + raw

        query = parse_query(text, self.sentinel)

        if isinstance(query, NoQuery):
            self._reset()
            return ApplyResult(query=query, text=text, rewritten=rewritten, result_count=0)

        self.tree.hide_all()
        self.tree.clear_matches()

        if isinstance(query, KindFilter):
            self._apply_kind_filter(query.kinds)
        elif isinstance(query, TextOnly):
            self._apply_text(query.tokens, kind_filter=None)
        elif isinstance(query, FilterAndText):
            self._apply_text(query.tokens, kind_filter=query.kinds)
        else:  # pragma: no cover
            raise TypeError(f"unexpected query type: {type(query).__name__}")

        self._status = EngineStatus.FILTERING
        result_count = sum(1 for node in self.tree.preorder_all() if node.is_search_result)
        logger.debug("Query %r (%s) flagged %d results", text, type(query).__name__, result_count)
        return ApplyResult(query=query, text=text, rewritten=rewritten, result_count=result_count)

    def _reset(self) -> None:
        self.tree.clear_matches()
        if self.mode == "symbol":
            self.tree.reveal_all()
        else:
            # There is no unfiltered line-level view.
            self.tree.hide_all()
        self._status = EngineStatus.IDLE

    def _apply_kind_filter(self, kinds: frozenset[SymbolKind]) -> None:
        if self.mode == "text":
            return
        for node in list(self.tree.symbols()):
            if node.kind in kinds:
                self.tree.mark_result(node)

    def _apply_text(
        self,
        tokens: Sequence[ParsedToken],
        *,
        kind_filter: frozenset[SymbolKind] | None,
    ) -> None:
        if self.mode == "text":
            for match in search_document(self.document, tokens):
                line = self.document.line_at(match.line)
                self.tree.insert_match(match, line, kind_filter)
            return

        matches = self._match_symbol_names(tokens)
        if kind_filter is None:
            for match, line in matches:
                self.tree.insert_match(match, line, None)
            return

        matched_lines = {match.line for match, _line in matches}
        for node in list(self.tree.symbols()):
            if node.kind in kind_filter and node.start_line in matched_lines:
                self.tree.mark_result(node)

    def _match_symbol_names(self, tokens: Sequence[ParsedToken]) -> list[tuple[MatchedRange, TextLine]]:
        """Match each symbol name as if it were the only text on its start line."""

        out: list[tuple[MatchedRange, TextLine]] = []
        for node in list(self.tree.symbols()):
            match = match_line(node.start_line, node.name, tokens)
            if match is not None:
                out.append((match, _name_line(node)))
        return out


def _name_line(node: SymbolNode) -> TextLine:
    line = node.start_line
    return TextLine(
        line_number=line,
        text=node.name,
        range=Range.from_coords(line, 0, line, len(node.name)),
    )
