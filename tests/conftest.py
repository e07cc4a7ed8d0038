"""Shared fixtures: a small Python document and its hand-built symbol forest."""

from __future__ import annotations

import pytest

from quickoutline.backends.document import TextDocument
from quickoutline.models.document import Range
from quickoutline.models.symbols import SymbolInfo, SymbolKind
from quickoutline.recording.recorder import EventRecorder

SAMPLE = '''import os

class Parser:
    """Parses things."""
    limit = 10

    def parse(self, text):
        tokens = text.split()
        return findme(tokens)

    def reset(self):
        self.limit = 0

def findme(value):
    return value

class Color(Enum):
    RED = 1

def helper():
    # FINDME later
    return None
'''


def make_symbol(
    document: TextDocument,
    name: str,
    kind: SymbolKind,
    start: int,
    end: int,
    children: list[SymbolInfo] | None = None,
) -> SymbolInfo:
    """Symbol spanning whole lines `start`..`end`, starting at the indentation."""

    start_text = document.line_at(start).text
    indent = len(start_text) - len(start_text.lstrip())
    return SymbolInfo(
        name=name,
        kind=kind,
        range=Range.from_coords(start, indent, end, len(document.line_at(end).text)),
        children=children or [],
    )


@pytest.fixture
def document() -> TextDocument:
    return TextDocument(SAMPLE)


@pytest.fixture
def forest(document: TextDocument) -> list[SymbolInfo]:
    """Symbols of SAMPLE, deliberately out of order."""

    s = make_symbol
    return [
        s(document, "helper", SymbolKind.FUNCTION, 19, 21),
        s(
            document,
            "Parser",
            SymbolKind.CLASS,
            2,
            11,
            [
                s(document, "reset", SymbolKind.METHOD, 10, 11),
                s(document, "limit", SymbolKind.PROPERTY, 4, 4),
                s(document, "parse", SymbolKind.METHOD, 6, 8),
            ],
        ),
        s(document, "findme", SymbolKind.FUNCTION, 13, 14),
        s(document, "Color", SymbolKind.ENUM, 16, 17, [s(document, "RED", SymbolKind.ENUM_MEMBER, 17, 17)]),
    ]


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder(session_id="test")


def names(nodes) -> list[str]:
    """Readable identity of outline rows: symbol names, or ``line:N`` for match leaves."""

    return [node.name if node.ty == "symbol" else f"line:{node.line_number}" for node in nodes]
