"""Outline tree, query engine, navigation and the session controller."""

from __future__ import annotations

from quickoutline.outline.engine import ApplyResult, EngineStatus, SearchEngine
from quickoutline.outline.navigation import NavigationIndex
from quickoutline.outline.session import OneShotGuard, OutlineSession, SessionPreconditionError
from quickoutline.outline.state import SearchMode, SessionState
from quickoutline.outline.tree import OutlineTree

__all__ = [
    "ApplyResult",
    "EngineStatus",
    "NavigationIndex",
    "OneShotGuard",
    "OutlineSession",
    "OutlineTree",
    "SearchEngine",
    "SearchMode",
    "SessionPreconditionError",
    "SessionState",
]
