"""CLI entrypoints for quickoutline."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from quickoutline.backends.document import TextDocument
from quickoutline.backends.python_symbols import PythonSymbolSource
from quickoutline.config import Settings, load_settings
from quickoutline.logging import configure_logging, get_logger
from quickoutline.outline.render import description_for, label_for
from quickoutline.outline.session import OutlineSession
from quickoutline.outline.state import SessionState
from quickoutline.recording.recorder import EventRecorder
from quickoutline.search.parser import KIND_FILTER_LETTERS
from quickoutline.utils.ids import next_session_id

app = typer.Typer(add_completion=False, help="Filterable, collapsible outline of a Python file")
logger = get_logger(__name__)
console = Console()


@app.command()
def show(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Python source file"),
    query: str = typer.Option("", "--query", "-q", help="Query, e.g. '#f parse' or '/^def/ !test'"),
    text: bool = typer.Option(False, "--text", help="Search document lines (text mode)"),
    cursor: int = typer.Option(0, "--cursor", "-c", min=0, help="Zero-based cursor line"),
    expand_all: bool = typer.Option(False, "--expand-all", help="Unfold every symbol"),
    events: Path | None = typer.Option(None, "--events", help="Append presentation events to a JSONL file"),
) -> None:
    """Print the outline of PATH as it would appear after typing QUERY."""

    settings = load_settings()
    configure_logging(settings.log_level)

    document = TextDocument.from_path(path)
    try:
        forest = PythonSymbolSource().symbols(document)
    except SyntaxError as e:
        raise typer.BadParameter(f"{path} is not valid Python: {e}") from e

    mode = "text" if text else settings.default_mode
    state = SessionState()
    state.set(mode, query)

    session_id = next_session_id()
    recorder = EventRecorder(session_id=session_id, path=events, settings=settings)
    session = OutlineSession(
        forest,
        document,
        recorder,
        mode=mode,
        state=state,
        cursor_line=cursor,
        settings=settings,
        session_id=session_id,
    )
    if expand_all:
        session.expand_all()

    logger.info("Rendering %d rows", len(recorder.items))
    _print_outline(recorder, document, settings)
    session.dispose()


@app.command()
def filters() -> None:
    """List the kind-filter letters usable after the sentinel."""

    settings = load_settings()
    table = Table(title="Kind filters")
    table.add_column("Token")
    table.add_column("Kinds")
    for letter, kinds in KIND_FILTER_LETTERS.items():
        table.add_row(f"{settings.sentinel}{letter}", ", ".join(sorted(k.value for k in kinds)))
    console.print(table)


def _print_outline(recorder: EventRecorder, document: TextDocument, settings: Settings) -> None:
    if not recorder.items:
        console.print("[dim]no matching symbols[/dim]")
        return

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("label", no_wrap=True)
    table.add_column("description", style="dim", overflow="ellipsis")
    for node in recorder.items:
        style = "reverse" if node is recorder.active else ("bold" if node.is_search_result else "")
        table.add_row(Text(label_for(node, settings)), Text(description_for(node, document)), style=style)
    console.print(table)


if __name__ == "__main__":
    app()
