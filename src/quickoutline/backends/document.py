"""In-memory document accessor."""

from __future__ import annotations

import bisect
import re
from pathlib import Path

from quickoutline.backends.protocol import DocumentAccessor
from quickoutline.models.document import Position, Range, TextLine

_WORD_RE = re.compile(r"\w+")


class TextDocument(DocumentAccessor):
    """A document held as a string, split on ``\\n`` (a trailing ``\\r`` is not line text)."""

    def __init__(self, text: str, *, uri: str | None = None) -> None:
        self.uri = uri
        self._text = text

        raw_lines = text.split("\n")
        self._lines = [line[:-1] if line.endswith("\r") else line for line in raw_lines]

        self._line_starts: list[int] = []
        offset = 0
        for raw in raw_lines:
            self._line_starts.append(offset)
            offset += len(raw) + 1

    @classmethod
    def from_path(cls, path: Path) -> TextDocument:
        return cls(path.read_text(encoding="utf-8"), uri=path.as_uri())

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> TextLine:
        if not 0 <= line < len(self._lines):
            raise IndexError(f"line {line} out of range (0..{len(self._lines) - 1})")
        text = self._lines[line]
        return TextLine(line_number=line, text=text, range=Range.from_coords(line, 0, line, len(text)))

    def offset_at(self, position: Position) -> int:
        line = min(position.line, len(self._lines) - 1)
        character = min(position.character, len(self._lines[line]))
        return self._line_starts[line] + character

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self._text)))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        character = min(offset - self._line_starts[line], len(self._lines[line]))
        return Position(line=line, character=character)

    def get_text(self, range: Range | None = None) -> str:  # noqa: A002
        if range is None:
            return self._text
        return self._text[self.offset_at(range.start):self.offset_at(range.end)]

    def word_range_at(self, position: Position) -> Range | None:
        if not 0 <= position.line < len(self._lines):
            return None
        for m in _WORD_RE.finditer(self._lines[position.line]):
            if m.start() <= position.character <= m.end():
                return Range.from_coords(position.line, m.start(), position.line, m.end())
        return None
