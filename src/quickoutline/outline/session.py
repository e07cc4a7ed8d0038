"""Outline session: the controller a host drives while the outline is open.

A session owns one outline tree for one document. The host forwards query edits,
selection changes and commands; the session mutates the tree and pushes the resulting
flattened list to its presentation sink.
"""

from __future__ import annotations

import contextlib
from typing import Any, Iterable, Iterator

from quickoutline.backends.protocol import DocumentAccessor, PresentationSink
from quickoutline.config import Settings
from quickoutline.logging import get_logger, session_context
from quickoutline.models.document import Position, Range
from quickoutline.models.outline import OutlineNode
from quickoutline.models.symbols import SymbolInfo, SymbolKind
from quickoutline.outline.engine import ApplyResult, SearchEngine
from quickoutline.outline.navigation import Direction, NavigationIndex
from quickoutline.outline.state import SearchMode, SessionState
from quickoutline.outline.tree import OutlineTree
from quickoutline.utils.ids import next_session_id

logger = get_logger(__name__)


class SessionPreconditionError(RuntimeError):
    """The caller and the session disagree about the session's state."""


class OneShotGuard:
    """Suppresses exactly one upcoming notification once armed."""

    def __init__(self) -> None:
        self._armed = False

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        self._armed = True

    def consume(self) -> bool:
        """Disarm and report whether the guard was armed."""

        was_armed = self._armed
        self._armed = False
        return was_armed


class OutlineSession:
    """Interactive outline over one document."""

    def __init__(
        self,
        forest: Iterable[SymbolInfo],
        document: DocumentAccessor,
        sink: PresentationSink,
        *,
        mode: SearchMode = "symbol",
        state: SessionState | None = None,
        cursor_line: int = 0,
        settings: Settings | None = None,
        session_id: str | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.session_id = session_id or next_session_id()
        self.mode: SearchMode = mode
        self.state = state if state is not None else SessionState()
        self.document = document
        self.sink = sink
        self.cursor_line = cursor_line

        self._tree: OutlineTree | None = OutlineTree.build(forest)
        self._engine: SearchEngine | None = SearchEngine(
            self._tree,
            document,
            mode=mode,
            state=self.state,
            sentinel=self.settings.sentinel,
        )
        self._index: NavigationIndex | None = NavigationIndex(self._tree, document)
        self._guard = OneShotGuard()
        self._active: OutlineNode | None = None
        self._disposed = False

        with self._context():
            logger.info("Opening outline with %d root symbols", len(self._tree.roots))
            sink.bind(self.on_query_changed)
            self._apply_query(self.state.get(mode), echo=True)
            if not self._engine.query_active:
                # Open on the symbol nearest to the cursor, unfolding the way to it.
                self._active = self._index.closest_node(
                    cursor_line, self._tree.preorder_all(), query_active=False
                )
                if self._active is not None and self.mode == "symbol":
                    self._tree.propagate_to_ancestors(self._active, _expand)
            self._publish()

    # Accessors

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def guard(self) -> OneShotGuard:
        return self._guard

    @property
    def tree(self) -> OutlineTree:
        self._ensure_open()
        assert self._tree is not None
        return self._tree

    @property
    def engine(self) -> SearchEngine:
        self._ensure_open()
        assert self._engine is not None
        return self._engine

    @property
    def index(self) -> NavigationIndex:
        self._ensure_open()
        assert self._index is not None
        return self._index

    @property
    def active(self) -> OutlineNode | None:
        return self._active

    @property
    def items(self) -> list[OutlineNode]:
        """The flattened list most recently sent to the sink."""

        return self.index.items

    # Host notifications

    def on_query_changed(self, text: str) -> None:
        """Handle an edit of the query field."""

        self._ensure_open()
        with self._context():
            if self._guard.consume():
                logger.debug("Ignoring change notification caused by our own rewrite")
                return
            self._apply_query(text, echo=False)
            self._publish()

    def on_active_changed(self, node: OutlineNode) -> None:
        """Handle the host moving the highlighted row to `node`."""

        self._ensure_open()
        if not self.index.contains(node):
            raise SessionPreconditionError("selected node is not part of the current outline")
        self._active = node
        self._highlight(node)

    # Commands

    def expand_active(self) -> None:
        self._ensure_open()
        if self._active is None:
            return
        self._active = self.index.expand(self._active)
        self._publish()

    def collapse_active(self) -> None:
        self._ensure_open()
        if self._active is None:
            return
        self._active = self.index.collapse(self._active)
        self._publish()

    def expand_all(self) -> None:
        self._ensure_open()
        self.tree.set_all_expanded(True)
        self._publish()

    def collapse_all(self) -> None:
        self._ensure_open()
        self.tree.set_all_expanded(False)
        self._publish()

    def show_all(self, kinds: Iterable[SymbolKind]) -> None:
        """Unfold the tree far enough that every symbol of the given kinds is listed."""

        self._ensure_open()
        wanted = set(kinds)
        for node in list(self.tree.symbols()):
            if node.kind in wanted:
                self.tree.propagate_to_ancestors(node, _expand)
        self._publish()

    def next_result(self) -> OutlineNode | None:
        return self._cycle("next")

    def previous_result(self) -> OutlineNode | None:
        return self._cycle("previous")

    def accept(self) -> Range | None:
        """Commit the active node: report its start to the sink and close the session."""

        self._ensure_open()
        node = self._active
        if node is None:
            return None

        target = _target_range(node)
        with self._context():
            logger.info("Accepted line %d", target.start.line)
            self.sink.accept(target)
            self.dispose()
        return target

    def dispose(self) -> None:
        """Close the session. Calling it again has no effect."""

        if self._disposed:
            return
        self._disposed = True
        with self._context():
            logger.debug("Disposing outline session")
            self.sink.decorate([])
            self.sink.close()
        self._tree = None
        self._engine = None
        self._index = None
        self._active = None

    # Internals

    def _ensure_open(self) -> None:
        if self._disposed:
            raise SessionPreconditionError(f"outline session {self.session_id} has been disposed")

    @contextlib.contextmanager
    def _context(self) -> Iterator[Any]:
        with session_context(session_id=self.session_id, mode=self.mode):
            yield

    def _apply_query(self, text: str, *, echo: bool) -> ApplyResult:
        result = self.engine.apply(text)
        if echo or result.rewritten:
            self._guard.arm()
            self.sink.set_query(result.text)

        snapshot = self.index.snapshot()
        self._active = self.index.closest_node(
            self.cursor_line, snapshot, query_active=self.engine.query_active
        )
        return result

    def _cycle(self, direction: Direction) -> OutlineNode | None:
        self._ensure_open()
        target = self.index.cycle(self._active, direction)
        if target is None:
            # No results anywhere: behave like plain arrow keys.
            target = self.index.step(self._active, direction)
        self._active = target
        self._publish()
        return target

    def _publish(self) -> None:
        items = self.index.snapshot()
        if self._active is not None and not self.index.contains(self._active):
            self._active = None
        self.sink.show(items, self._active)
        if self._active is not None:
            self._highlight(self._active)

    def _highlight(self, node: OutlineNode) -> None:
        self.sink.reveal(node.range if node.ty == "symbol" else node.line.range)
        self.sink.decorate([self.index.name_range(node)])


def _expand(node: OutlineNode) -> None:
    node.expanded = True


def _target_range(node: OutlineNode) -> Range:
    if node.ty == "symbol":
        start = node.range.start
    else:
        character = node.match.ranges[0][0] if node.match.ranges else 0
        start = Position(line=node.line_number, character=character)
    return Range(start=start, end=start)
