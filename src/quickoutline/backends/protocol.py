"""Protocol definitions for the outline's external collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Sequence

from quickoutline.models.document import Position, Range, TextLine
from quickoutline.models.symbols import SymbolInfo

if TYPE_CHECKING:
    from quickoutline.models.outline import OutlineNode


class DocumentAccessor(ABC):
    """Read-only access to the lines of one document."""

    @property
    @abstractmethod
    def line_count(self) -> int:
        """Number of lines in the document."""

    @abstractmethod
    def line_at(self, line: int) -> TextLine:
        """Return the text and range of a line."""

    @abstractmethod
    def offset_at(self, position: Position) -> int:
        """Convert a position to a character offset."""

    @abstractmethod
    def position_at(self, offset: int) -> Position:
        """Convert a character offset to a position."""

    @abstractmethod
    def get_text(self, range: Range | None = None) -> str:  # noqa: A002
        """Return the text inside `range`, or the whole document."""

    @abstractmethod
    def word_range_at(self, position: Position) -> Range | None:
        """Return the range of the word touching `position`, if any."""


class SymbolSource(ABC):
    """Produces the structural symbol forest of a document."""

    @abstractmethod
    def symbols(self, document: DocumentAccessor) -> list[SymbolInfo]:
        """Return top-level symbols; ordering is not guaranteed."""


class PresentationSink(ABC):
    """Receives everything the host needs to render the outline."""

    @abstractmethod
    def bind(self, on_query_changed: Callable[[str], None]) -> None:
        """Register the callback the host invokes whenever the query text changes.

        Rewrites made through :meth:`set_query` are reported through the same callback,
        synchronously, just like user edits.
        """

    @abstractmethod
    def show(self, items: Sequence[OutlineNode], active: OutlineNode | None) -> None:
        """Render the flattened visible nodes and mark the active one."""

    @abstractmethod
    def set_query(self, text: str) -> None:
        """Rewrite the visible query text."""

    @abstractmethod
    def reveal(self, range: Range) -> None:  # noqa: A002
        """Scroll the editor so that `range` is visible."""

    @abstractmethod
    def decorate(self, ranges: Sequence[Range]) -> None:
        """Replace the selection decorations; an empty list clears them."""

    @abstractmethod
    def accept(self, target: Range) -> None:
        """Commit the selection at `target`."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the pick list."""
