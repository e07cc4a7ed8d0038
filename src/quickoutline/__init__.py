"""quickoutline: a filterable, collapsible outline of a document's symbols and lines."""

from __future__ import annotations

__version__ = "0.1.0"

from quickoutline.outline import OutlineSession, SessionPreconditionError, SessionState

__all__ = ["OutlineSession", "SessionPreconditionError", "SessionState", "__version__"]
