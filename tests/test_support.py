"""Tests for settings, row labels, the recording sink and id helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from quickoutline.backends.document import TextDocument
from quickoutline.config import Settings, load_settings
from quickoutline.events import EventType
from quickoutline.models.symbols import SymbolInfo
from quickoutline.outline.engine import SearchEngine
from quickoutline.outline.render import description_for, icon_for_kind, label_for
from quickoutline.outline.state import SessionState
from quickoutline.outline.tree import OutlineTree
from quickoutline.recording.recorder import EventRecorder, iter_events
from quickoutline.utils.ids import format_session_id, next_session_id


def test_load_settings_reads_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """It should pick up a .env file in the working directory."""

    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("QUICKOUTLINE_SENTINEL=@\nQUICKOUTLINE_INDENT_WIDTH=2\n", encoding="utf-8")

    settings = load_settings()
    assert settings.sentinel == "@"
    assert settings.indent_width == 2


def test_settings_reject_multi_character_sentinel() -> None:
    """It should only allow a single-character sentinel."""

    with pytest.raises(ValidationError):
        Settings(sentinel="##")


def test_labels_show_line_marker_indent_and_icon(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should render symbol rows and match leaves with padded line numbers."""

    settings = Settings(indent_width=2, line_number_width=4, result_marker="*")
    tree = OutlineTree.build(forest)
    SearchEngine(tree, document, mode="text", state=SessionState()).apply("#findme")

    parser = tree.roots[0]
    parse = parser.children[1]
    leaf = parse.children[-1]

    assert label_for(parser, settings) == "2" + " " * 5 + "C Parser"
    assert label_for(parse, settings) == "6" + " " * 7 + "m parse"
    assert label_for(leaf, settings) == "8*" + " " * 8 + "return findme(tokens)"
    assert label_for(tree.roots[1], settings) == "13*" + " " * 3 + "f findme"

    assert description_for(parser, document) == "class Parser:"
    assert description_for(leaf, document) == ""
    assert icon_for_kind(tree.roots[2].kind) == "E"


def test_recorder_appends_jsonl(tmp_path: Path) -> None:
    """It should number events and write one JSON object per line."""

    path = tmp_path / "nested" / "events.jsonl"
    recorder = EventRecorder(session_id="qo_0042", path=path)
    seen: list[str] = []
    recorder.bind(seen.append)

    recorder.set_query("#f")
    recorder.show([], None)
    recorder.close()

    assert seen == ["#f"]
    assert recorder.query_text == "#f"
    events = iter_events(path)
    assert [ev.event_type for ev in events] == [EventType.SET_QUERY, EventType.SHOW, EventType.CLOSE]
    assert [ev.seq for ev in events] == [1, 2, 3]
    assert all(ev.session_id == "qo_0042" for ev in events)
    assert iter_events(tmp_path / "missing.jsonl") == []


def test_session_ids() -> None:
    """It should format zero-padded ids and never repeat one."""

    assert format_session_id(7) == "qo_0007"
    assert next_session_id() != next_session_id()
