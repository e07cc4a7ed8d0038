"""Search-related models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ParsedToken(BaseModel):
    """A single whitespace-separated query token.

    ``pattern`` keeps regex delimiters (``/body/flags``) but never the leading ``!``.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str
    is_regex: bool = False
    case_sensitive: bool = False
    negate: bool = False


class MatchedRange(BaseModel):
    """Character spans matched on one line.

    ``ranges`` holds ``(start, length)`` pairs and is empty when every token was a
    satisfied negation.
    """

    line: int = Field(ge=0)
    ranges: list[tuple[int, int]] = Field(default_factory=list)
