"""Tests for the command line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import SAMPLE
from typer.testing import CliRunner

from quickoutline.cli import app
from quickoutline.events import EventType
from quickoutline.recording.recorder import iter_events

runner = CliRunner()


@pytest.fixture
def source_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "sample.py"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


def test_show_prints_default_outline(source_file: Path) -> None:
    """It should list the top-level symbols when no query is given."""

    result = runner.invoke(app, ["show", str(source_file)])
    assert result.exit_code == 0, result.output
    for name in ("Parser", "findme", "Color", "helper"):
        assert name in result.output
    assert "reset" not in result.output


def test_show_applies_query(source_file: Path) -> None:
    """It should print only the symbols selected by the query."""

    result = runner.invoke(app, ["show", str(source_file), "--query", "#f find"])
    assert result.exit_code == 0, result.output
    assert "findme" in result.output
    assert "Parser" not in result.output


def test_show_reports_empty_outline(source_file: Path) -> None:
    """It should say so when nothing matches."""

    result = runner.invoke(app, ["show", str(source_file), "--text", "-q", "nothing-here"])
    assert result.exit_code == 0, result.output
    assert "no matching symbols" in result.output


def test_show_rejects_invalid_python(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """It should exit with a usage error for unparsable source."""

    monkeypatch.chdir(tmp_path)
    path = tmp_path / "broken.py"
    path.write_text("def broken(:\n", encoding="utf-8")

    result = runner.invoke(app, ["show", str(path)])
    assert result.exit_code == 2


def test_show_writes_event_log(source_file: Path, tmp_path: Path) -> None:
    """It should append the presentation calls to a JSONL file."""

    events_path = tmp_path / "out" / "events.jsonl"
    result = runner.invoke(app, ["show", str(source_file), "-q", "#f find", "--events", str(events_path)])
    assert result.exit_code == 0, result.output

    events = iter_events(events_path)
    assert events[0].event_type == EventType.SET_QUERY
    assert events[0].data == "#f find"
    assert events[-1].event_type == EventType.CLOSE
    shows = [ev for ev in events if ev.event_type == EventType.SHOW]
    assert any("findme" in label for label in shows[-1].data["items"])
    assert [ev.seq for ev in events] == list(range(1, len(events) + 1))


def test_filters_uses_configured_sentinel(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """It should list kind filters prefixed with the configured sentinel."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("QUICKOUTLINE_SENTINEL", "@")
    result = runner.invoke(app, ["filters"])
    assert result.exit_code == 0, result.output
    assert "@f" in result.output
    assert "function" in result.output
