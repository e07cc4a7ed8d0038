"""Tests for the query engine."""

from __future__ import annotations

import pytest
from conftest import names

from quickoutline.backends.document import TextDocument
from quickoutline.models.query import FilterAndText, KindFilter, NoQuery, TextOnly
from quickoutline.models.symbols import SymbolInfo
from quickoutline.outline.engine import EngineStatus, SearchEngine
from quickoutline.outline.state import SessionState
from quickoutline.outline.tree import OutlineTree
from quickoutline.search.matcher import search_document
from quickoutline.search.tokenizer import tokenize


def _engine(forest: list[SymbolInfo], document: TextDocument, mode: str) -> SearchEngine:
    return SearchEngine(OutlineTree.build(forest), document, mode=mode, state=SessionState())


def test_apply_persists_query_and_prefixes_sentinel(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should store the raw query for its mode and add a missing sentinel."""

    engine = _engine(forest, document, "text")
    result = engine.apply("findme")

    assert engine.state.text_query == "findme"
    assert engine.state.symbol_query == ""
    assert result.text == "#findme"
    assert result.rewritten is True
    assert isinstance(result.query, TextOnly)

    again = engine.apply("#findme")
    assert again.rewritten is False


def test_text_mode_text_only_query(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should attach every matching line under its innermost symbol, case-insensitively."""

    engine = _engine(forest, document, "text")
    result = engine.apply("#findme")

    assert engine.status is EngineStatus.FILTERING
    assert names(engine.tree.flatten_visible()) == ["Parser", "parse", "line:8", "findme", "helper", "line:20"]
    assert result.result_count == 3


def test_text_mode_leaves_match_matcher_output(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should create exactly one leaf or marked symbol per matched line inside a symbol."""

    engine = _engine(forest, document, "text")
    engine.apply("#return")

    matched = {m.line for m in search_document(document, tokenize("return"))}
    flagged: set[int] = set()
    for node in engine.tree.preorder_all():
        if node.ty == "line":
            flagged.add(node.line_number)
        elif node.is_search_result:
            flagged.add(node.start_line)
    assert flagged == matched


def test_text_mode_case_sensitive_query(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should only match the upper-case occurrence for an upper-case token."""

    engine = _engine(forest, document, "text")
    engine.apply("#FINDME")
    assert names(engine.tree.flatten_visible()) == ["helper", "line:20"]


def test_text_mode_filter_and_text(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should only attach matches to symbols passing the kind filter."""

    engine = _engine(forest, document, "text")
    result = engine.apply("#c limit")

    assert isinstance(result.query, FilterAndText)
    assert names(engine.tree.flatten_visible()) == ["Parser", "limit", "line:11"]


def test_text_mode_kind_filter_alone_shows_nothing(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should hide everything for a bare kind filter in text mode."""

    engine = _engine(forest, document, "text")
    result = engine.apply("#f")
    assert isinstance(result.query, KindFilter)
    assert engine.tree.flatten_visible() == []


def test_text_mode_empty_query_hides_everything(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should yield an empty outline for no query in text mode."""

    engine = _engine(forest, document, "text")
    engine.apply("#findme")
    result = engine.apply("#")

    assert isinstance(result.query, NoQuery)
    assert engine.status is EngineStatus.IDLE
    assert engine.tree.flatten_visible() == []
    assert all(node.ty == "symbol" for node in engine.tree.preorder_all())


def test_text_mode_malformed_regex_matches_nothing(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should degrade an unterminated regex to no results instead of raising."""

    engine = _engine(forest, document, "text")
    result = engine.apply("#/unterminated")
    assert result.result_count == 0
    assert engine.tree.flatten_visible() == []


def test_symbol_mode_empty_query_restores_default_tree(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should reveal every node with nothing expanded for no query in symbol mode."""

    engine = _engine(forest, document, "symbol")
    engine.apply("#parse")
    engine.apply("#")

    assert not any(node.hidden or node.expanded for node in engine.tree.preorder_all())
    assert names(engine.tree.flatten_visible()) == ["Parser", "findme", "Color", "helper"]


def test_symbol_mode_text_matches_names(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should match symbol names rather than line text."""

    engine = _engine(forest, document, "symbol")
    engine.apply("#parse")

    visible = engine.tree.flatten_visible()
    assert names(visible) == ["Parser", "parse"]
    assert all(node.is_search_result for node in visible)
    assert all(node.ty == "symbol" for node in engine.tree.preorder_all())


def test_symbol_mode_kind_filter(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should flag exactly the symbols of the filtered kinds and open their ancestors."""

    engine = _engine(forest, document, "symbol")
    engine.apply("#t")
    assert names(engine.tree.flatten_visible()) == ["Parser"]

    engine.apply("#e")
    assert names(engine.tree.flatten_visible()) == ["Color", "RED"]
    assert [n.is_search_result for n in engine.tree.flatten_visible()] == [True, True]


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("#t pars", ["Parser"]),
        ("#t findme", []),
        ("#f find", ["findme"]),
        ("#f !find", ["Parser", "parse", "reset", "helper"]),
    ],
)
def test_symbol_mode_filter_and_text(
    forest: list[SymbolInfo], document: TextDocument, query: str, expected: list[str]
) -> None:
    """It should require both the kind filter and a name match."""

    engine = _engine(forest, document, "symbol")
    engine.apply(query)
    assert names(engine.tree.flatten_visible()) == expected


def test_repeated_queries_do_not_accumulate_leaves(forest: list[SymbolInfo], document: TextDocument) -> None:
    """It should drop the previous pass's leaves before inserting new ones."""

    engine = _engine(forest, document, "text")
    for _ in range(3):
        engine.apply("#findme")
    leaves = [node for node in engine.tree.preorder_all() if node.ty == "line"]
    assert [leaf.line_number for leaf in leaves] == [8, 20]
