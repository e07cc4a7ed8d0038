"""Recording presentation sink.

Records every presentation call as an :class:`OutlineEvent`, optionally appending them to a
JSONL file for replay.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from quickoutline.backends.protocol import PresentationSink
from quickoutline.config import Settings
from quickoutline.events import EventType, OutlineEvent
from quickoutline.models.document import Range
from quickoutline.models.outline import OutlineNode
from quickoutline.outline.render import label_for


@dataclass
class EventRecorder(PresentationSink):
    """Presentation sink that keeps the latest state and an event log."""

    session_id: str = "-"
    path: Path | None = None
    settings: Settings = field(default_factory=Settings)

    events: list[OutlineEvent] = field(default_factory=list)
    items: list[OutlineNode] = field(default_factory=list)
    active: OutlineNode | None = None
    query_text: str | None = None
    decorations: list[Range] = field(default_factory=list)
    accepted: Range | None = None
    closed: bool = False

    listener: Callable[[str], None] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def bind(self, on_query_changed: Callable[[str], None]) -> None:
        self.listener = on_query_changed

    def type_query(self, text: str) -> None:
        """Simulate the user editing the query field."""

        self.query_text = text
        if self.listener is not None:
            self.listener(text)

    def show(self, items: Sequence[OutlineNode], active: OutlineNode | None) -> None:
        self.items = list(items)
        self.active = active
        self._record(
            EventType.SHOW,
            {
                "items": [label_for(node, self.settings) for node in self.items],
                "active": label_for(active, self.settings) if active is not None else None,
            },
        )

    def set_query(self, text: str) -> None:
        self._record(EventType.SET_QUERY, text)
        # Like a real query field, a programmatic rewrite is reported as a change.
        self.type_query(text)

    def reveal(self, range: Range) -> None:  # noqa: A002
        self._record(EventType.REVEAL, range.model_dump(mode="json"))

    def decorate(self, ranges: Sequence[Range]) -> None:
        self.decorations = list(ranges)
        self._record(EventType.DECORATE, [r.model_dump(mode="json") for r in self.decorations])

    def accept(self, target: Range) -> None:
        self.accepted = target
        self._record(EventType.ACCEPT, target.model_dump(mode="json"))

    def close(self) -> None:
        self.closed = True
        self._record(EventType.CLOSE, None)

    def of_type(self, event_type: EventType) -> list[OutlineEvent]:
        return [ev for ev in self.events if ev.event_type == event_type]

    def _record(self, event_type: EventType, data: str | dict | list | None) -> None:
        event = OutlineEvent(
            session_id=self.session_id,
            seq=len(self.events) + 1,
            event_type=event_type,
            data=data,
        )
        self.events.append(event)
        if self.path is not None:
            line = json.dumps(event.model_dump(mode="json"), ensure_ascii=False)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")


def iter_events(path: Path) -> list[OutlineEvent]:
    """Load all events from a JSONL file."""

    events: list[OutlineEvent] = []
    if not path.exists():
        return events
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line:
            continue
        events.append(OutlineEvent.model_validate_json(line))
    return events
