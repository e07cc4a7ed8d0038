"""Query text tokenizer."""

from __future__ import annotations

from quickoutline.models.search import ParsedToken

NEGATION_MARKER = "!"
REGEX_DELIMITER = "/"


def tokenize(text: str) -> list[ParsedToken]:
    """Split query text into typed tokens.

    The sentinel must already be stripped. Each whitespace-separated fragment may start
    with ``!`` (negate) followed by ``/`` (regex). Case sensitivity is decided by the
    fragment as typed: any upper-case letter makes the token case sensitive.

    Args:
        text: Query text without the sentinel.

    Returns:
        Tokens in input order; an empty list when `text` is blank.
    """

    tokens: list[ParsedToken] = []
    for fragment in text.split():
        negate = fragment.startswith(NEGATION_MARKER)
        pattern = fragment[len(NEGATION_MARKER):] if negate else fragment
        tokens.append(
            ParsedToken(
                pattern=pattern,
                is_regex=pattern.startswith(REGEX_DELIMITER),
                case_sensitive=any(ch.isupper() for ch in fragment),
                negate=negate,
            )
        )
    return tokens
