"""Selection heuristics over the visible outline."""

from __future__ import annotations

from typing import Iterable, Literal

from quickoutline.backends.protocol import DocumentAccessor
from quickoutline.models.document import Position, Range
from quickoutline.models.outline import OutlineNode
from quickoutline.outline.tree import OutlineTree

Direction = Literal["next", "previous"]


class NavigationIndex:
    """Flattened view of an outline tree plus the selection rules that depend on it."""

    def __init__(self, tree: OutlineTree, document: DocumentAccessor) -> None:
        self.tree = tree
        self.document = document
        self._snapshot: list[OutlineNode] = []

    @property
    def items(self) -> list[OutlineNode]:
        """The most recently computed flattened order."""

        return self._snapshot

    def snapshot(self) -> list[OutlineNode]:
        self._snapshot = self.tree.flatten_visible()
        return self._snapshot

    def contains(self, node: OutlineNode) -> bool:
        return any(item is node for item in self._snapshot)

    def index_of(self, node: OutlineNode | None) -> int:
        if node is None:
            return -1
        for i, item in enumerate(self._snapshot):
            if item is node:
                return i
        return -1

    # Positions

    def _name_position(self, node: OutlineNode) -> Position | None:
        """Position one character into the symbol's name, or None when not found."""

        if node.ty != "symbol":
            return None
        offset = self.document.get_text(node.range).find(node.name)
        if offset == -1:
            return None
        token_position = self.document.position_at(self.document.offset_at(node.range.start) + offset)
        return token_position.translate(character_delta=1)

    def effective_line(self, node: OutlineNode) -> int:
        if node.ty == "line":
            return node.line_number
        position = self._name_position(node)
        return position.line if position is not None else node.start_line

    def name_range(self, node: OutlineNode) -> Range:
        """Range used to highlight the node in the editor."""

        if node.ty == "line":
            return node.line.range

        position = self._name_position(node)
        if position is None:
            return Range(start=node.range.start, end=node.range.start)
        word = self.document.word_range_at(position)
        if word is not None:
            return word
        start = position.translate(character_delta=-1)
        return Range(start=start, end=start.translate(character_delta=4))

    # Selection

    def closest_node(
        self,
        cursor_line: int,
        candidates: Iterable[OutlineNode],
        *,
        query_active: bool,
    ) -> OutlineNode | None:
        """Pick the candidate whose line is nearest to the cursor.

        Hidden nodes are skipped, and so are non-results while a query is active. On a
        tie the later candidate wins.
        """

        closest: OutlineNode | None = None
        closest_distance = 0
        for node in candidates:
            if node.hidden:
                continue
            if query_active and not node.is_search_result:
                continue
            distance = abs(cursor_line - self.effective_line(node))
            if closest is None or distance <= closest_distance:
                closest = node
                closest_distance = distance
        return closest

    def cycle(self, current: OutlineNode | None, direction: Direction) -> OutlineNode | None:
        """Return the next or previous search result, wrapping around at either end.

        Returns None when the visible outline contains no result at all.
        """

        items = self._snapshot
        results = [i for i, node in enumerate(items) if node.is_search_result]
        if not results:
            return None

        start = self.index_of(current)
        if direction == "next":
            for i in results:
                if i > start:
                    return items[i]
            return items[results[0]]

        if start == -1:
            start = len(items)
        for i in reversed(results):
            if i < start:
                return items[i]
        return items[results[-1]]

    def step(self, current: OutlineNode | None, direction: Direction) -> OutlineNode | None:
        """Move one row in the flattened order without wrapping."""

        items = self._snapshot
        if not items:
            return None
        index = self.index_of(current)
        if index == -1:
            return items[0] if direction == "next" else items[-1]
        index = index + 1 if direction == "next" else index - 1
        return items[max(0, min(index, len(items) - 1))]

    # Expand / collapse

    def collapse(self, node: OutlineNode) -> OutlineNode:
        """Collapse the group containing `node` and return the new selection.

        With a parent, the whole parent group folds and the parent is selected. A root
        folds itself and the selection moves to the nearest previous root that is not
        hidden, when there is one.
        """

        target: OutlineNode = node
        selection: OutlineNode = node
        parent = node.parent
        if parent is not None:
            target = parent
            selection = parent
        else:
            roots = self.tree.roots
            index = next((i for i, root in enumerate(roots) if root is node), -1)
            for root in reversed(roots[:max(index, 0)]):
                if not root.hidden:
                    selection = root
                    break

        target.expanded = False
        for child in self.tree.descendants(target):
            child.expanded = False
        return selection

    def expand(self, node: OutlineNode) -> OutlineNode:
        """Expand `node` and return the new selection.

        That is the first child that is not hidden, else the next visible row.
        """

        node.expanded = True
        for child in node.children:
            if not child.hidden:
                return child

        index = self.index_of(node)
        if index != -1 and index + 1 < len(self._snapshot):
            return self._snapshot[index + 1]
        return node
