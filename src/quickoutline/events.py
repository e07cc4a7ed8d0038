"""Event model for presentation updates.

A session drives its presentation sink through a sequence of calls. The recording sink turns
each call into an event so a session can be inspected or replayed later (tests, debugging,
UI playback).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Presentation calls."""

    SHOW = "show"
    SET_QUERY = "set_query"
    REVEAL = "reveal"
    DECORATE = "decorate"
    ACCEPT = "accept"
    CLOSE = "close"


class OutlineEvent(BaseModel):
    """A single presentation event."""

    session_id: str
    seq: int = Field(ge=1)
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    event_type: EventType
    data: str | dict | list | None = None
