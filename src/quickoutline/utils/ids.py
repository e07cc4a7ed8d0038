"""ID utilities."""

from __future__ import annotations

import itertools

_session_counter = itertools.count(1)


def next_session_id(prefix: str = "qo_") -> str:
    """Return a fresh, process-unique session id."""

    return format_session_id(next(_session_counter), prefix)


def format_session_id(n: int, prefix: str = "qo_") -> str:
    """Format a numeric counter to a session id.

    Uses zero-padded numbers (e.g., qo_0001) so ids sort naturally in logs.
    """

    return f"{prefix}{n:04d}"
