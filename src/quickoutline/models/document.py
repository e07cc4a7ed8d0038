"""Document position models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """A zero-based line/character position inside a document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(default=0, ge=0)

    def key(self) -> tuple[int, int]:
        return (self.line, self.character)

    def translate(self, *, line_delta: int = 0, character_delta: int = 0) -> Position:
        return Position(line=self.line + line_delta, character=self.character + character_delta)


class Range(BaseModel):
    """A half-open span between two positions."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def from_coords(cls, start_line: int, start_char: int, end_line: int, end_char: int) -> Range:
        return cls(
            start=Position(line=start_line, character=start_char),
            end=Position(line=end_line, character=end_char),
        )

    def contains(self, other: Range) -> bool:
        """Return True when `other` lies entirely inside this range."""

        return self.start.key() <= other.start.key() and other.end.key() <= self.end.key()


class TextLine(BaseModel):
    """One line of a document as handed out by a document accessor."""

    model_config = ConfigDict(frozen=True)

    line_number: int = Field(ge=0)
    text: str
    range: Range
