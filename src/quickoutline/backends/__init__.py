"""Collaborator interfaces and their reference implementations."""

from __future__ import annotations

from quickoutline.backends.document import TextDocument
from quickoutline.backends.protocol import DocumentAccessor, PresentationSink, SymbolSource
from quickoutline.backends.python_symbols import PythonSymbolSource

__all__ = [
    "DocumentAccessor",
    "PresentationSink",
    "PythonSymbolSource",
    "SymbolSource",
    "TextDocument",
]
