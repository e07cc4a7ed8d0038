"""Line matching for parsed query tokens."""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING, Iterable, Sequence

from quickoutline.logging import get_logger
from quickoutline.models.search import MatchedRange, ParsedToken

if TYPE_CHECKING:
    from quickoutline.backends.protocol import DocumentAccessor

logger = get_logger(__name__)

_REGEX_TOKEN_RE = re.compile(r"^/(.*?)/([gimsuy]*)$", re.DOTALL)

# g, u and y have no equivalent here and are accepted without effect.
_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


@functools.lru_cache(maxsize=256)
def compile_regex_token(pattern: str) -> re.Pattern[str] | None:
    """Compile a ``/body/flags`` token, or return None when it is malformed."""

    m = _REGEX_TOKEN_RE.match(pattern)
    if not m:
        logger.debug("Regex token %r has no closing delimiter", pattern)
        return None

    body, flag_letters = m.groups()
    flags = 0
    for letter in flag_letters:
        flags |= _REGEX_FLAGS.get(letter, 0)

    try:
        return re.compile(body, flags)
    except re.error as e:
        logger.debug("Regex token %r does not compile: %s", pattern, e)
        return None


def match_line(line_index: int, text: str, tokens: Sequence[ParsedToken]) -> MatchedRange | None:
    """Evaluate all tokens against one line.

    Tokens are ANDed. A positive token records the span of its first hit; a satisfied
    negation records nothing. A malformed regex token excludes the line outright.

    Args:
        line_index: Zero-based line number stored on the result.
        text: Line text.
        tokens: Parsed query tokens.

    Returns:
        The matched spans, or None when the line is excluded.
    """

    ranges: list[tuple[int, int]] = []
    lowered: str | None = None

    for token in tokens:
        if token.is_regex:
            regex = compile_regex_token(token.pattern)
            if regex is None:
                return None

            found = regex.search(text)
            if found is None:
                if not token.negate:
                    return None
                continue
            if token.negate:
                return None
            ranges.append((found.start(), found.end() - found.start()))
            continue

        if token.case_sensitive:
            index = text.find(token.pattern)
        else:
            if lowered is None:
                lowered = text.lower()
            index = lowered.find(token.pattern.lower())

        if token.negate:
            if index != -1:
                return None
            continue
        if index == -1:
            return None
        ranges.append((index, len(token.pattern)))

    return MatchedRange(line=line_index, ranges=ranges)


def search_lines(lines: Iterable[tuple[int, str]], tokens: Sequence[ParsedToken]) -> list[MatchedRange]:
    """Match every ``(line_index, text)`` pair, keeping the non-excluded ones in order."""

    out: list[MatchedRange] = []
    for line_index, text in lines:
        matched = match_line(line_index, text, tokens)
        if matched is not None:
            out.append(matched)
    return out


def search_document(document: DocumentAccessor, tokens: Sequence[ParsedToken]) -> list[MatchedRange]:
    """Match every line of a document."""

    return search_lines(
        ((i, document.line_at(i).text) for i in range(document.line_count)),
        tokens,
    )
