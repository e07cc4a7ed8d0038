"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any

from rich.logging import RichHandler


_session_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "quickoutline_session_id", default="-"
)
_mode_var: contextvars.ContextVar[str] = contextvars.ContextVar("quickoutline_mode", default="-")


class _ContextFilter(logging.Filter):
    """Inject session context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.session_id = _session_id_var.get()  # type: ignore[attr-defined]
        record.mode = _mode_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def session_context(*, session_id: str, mode: str | None = None) -> Any:
    """Temporarily bind outline session context for structured logging.

    Args:
        session_id: Session identifier.
        mode: Optional search mode (``symbol`` or ``text``).
    """

    token_session = _session_id_var.set(session_id)
    token_mode = _mode_var.set(mode or _mode_var.get())
    try:
        yield
    finally:
        _session_id_var.reset(token_session)
        _mode_var.reset(token_mode)


def configure_logging(level: str = "WARNING") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
    handler.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s session=%(session_id)s mode=%(mode)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # Repeated calls only adjust the level
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)
