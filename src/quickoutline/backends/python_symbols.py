"""Symbol source for Python documents.

Uses the standard :mod:`ast` module. Ranges start at the ``def``/``class`` keyword line
(decorators are not included) and extend to the end of the last line of the body, so
every body line is contained by its symbol.
"""

from __future__ import annotations

import ast

from quickoutline.backends.protocol import DocumentAccessor, SymbolSource
from quickoutline.logging import get_logger
from quickoutline.models.document import Range
from quickoutline.models.symbols import SymbolInfo, SymbolKind

logger = get_logger(__name__)

_ENUM_BASES = {"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag"}

_FunctionDef = ast.FunctionDef | ast.AsyncFunctionDef


class PythonSymbolSource(SymbolSource):
    """Extract classes, functions, methods and assignments from Python source."""

    def symbols(self, document: DocumentAccessor) -> list[SymbolInfo]:
        tree = ast.parse(document.get_text())
        out = self._collect(tree.body, document, container=None)
        logger.debug("Extracted %d top-level symbols", len(out))
        return out

    def _collect(
        self,
        body: list[ast.stmt],
        document: DocumentAccessor,
        *,
        container: SymbolKind | None,
    ) -> list[SymbolInfo]:
        out: list[SymbolInfo] = []
        for stmt in body:
            if isinstance(stmt, ast.ClassDef):
                kind = SymbolKind.ENUM if _is_enum(stmt) else SymbolKind.CLASS
                bases = ", ".join(ast.unparse(b) for b in stmt.bases)
                out.append(
                    SymbolInfo(
                        name=stmt.name,
                        kind=kind,
                        range=_range_for(stmt, document),
                        detail=f"({bases})" if bases else None,
                        children=self._collect(stmt.body, document, container=kind),
                    )
                )
            elif isinstance(stmt, _FunctionDef):
                out.append(
                    SymbolInfo(
                        name=stmt.name,
                        kind=_function_kind(stmt, container),
                        range=_range_for(stmt, document),
                        detail=f"({ast.unparse(stmt.args)})",
                        children=self._collect(stmt.body, document, container=SymbolKind.FUNCTION),
                    )
                )
            elif isinstance(stmt, (ast.Assign, ast.AnnAssign)) and container is not SymbolKind.FUNCTION:
                for name in _assigned_names(stmt):
                    out.append(
                        SymbolInfo(
                            name=name,
                            kind=_assignment_kind(name, container),
                            range=_range_for(stmt, document),
                        )
                    )
        return out


def _is_enum(node: ast.ClassDef) -> bool:
    for base in node.bases:
        name = base.attr if isinstance(base, ast.Attribute) else getattr(base, "id", None)
        if name in _ENUM_BASES:
            return True
    return False


def _function_kind(node: ast.FunctionDef | ast.AsyncFunctionDef, container: SymbolKind | None) -> SymbolKind:
    if container in (SymbolKind.CLASS, SymbolKind.ENUM):
        return SymbolKind.CONSTRUCTOR if node.name == "__init__" else SymbolKind.METHOD
    return SymbolKind.FUNCTION


def _assignment_kind(name: str, container: SymbolKind | None) -> SymbolKind:
    if container is SymbolKind.ENUM:
        return SymbolKind.ENUM_MEMBER
    if container is SymbolKind.CLASS:
        return SymbolKind.PROPERTY
    return SymbolKind.CONSTANT if name.isupper() else SymbolKind.VARIABLE


def _assigned_names(node: ast.Assign | ast.AnnAssign) -> list[str]:
    targets = node.targets if isinstance(node, ast.Assign) else [node.target]
    names: list[str] = []
    for target in targets:
        if isinstance(target, ast.Name):
            names.append(target.id)
        elif isinstance(target, ast.Tuple):
            names.extend(elt.id for elt in target.elts if isinstance(elt, ast.Name))
    return names


def _range_for(node: ast.stmt, document: DocumentAccessor) -> Range:
    start_line = node.lineno - 1
    end_line = (node.end_lineno or node.lineno) - 1
    end_char = len(document.line_at(end_line).text)
    return Range.from_coords(start_line, node.col_offset, end_line, end_char)
