from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SearchMode = Literal["symbol", "text"]


@dataclass
class SessionState:
    """Last query typed in each search mode.

    Owned by the host for the lifetime of the process and handed to every outline session,
    so reopening the outline restores what was typed before.
    """

    symbol_query: str = ""
    text_query: str = ""

    def get(self, mode: SearchMode) -> str:
        if mode == "symbol":
            return self.symbol_query
        return self.text_query

    def set(self, mode: SearchMode, query: str) -> None:
        if mode == "symbol":
            self.symbol_query = query
        else:
            self.text_query = query
