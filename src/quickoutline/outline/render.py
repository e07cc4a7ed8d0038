"""Text labels for outline rows."""

from __future__ import annotations

from quickoutline.backends.protocol import DocumentAccessor
from quickoutline.config import Settings
from quickoutline.models.outline import OutlineNode
from quickoutline.models.symbols import SymbolKind

_KIND_ICONS: dict[SymbolKind, str] = {
    SymbolKind.FILE: "F",
    SymbolKind.MODULE: "M",
    SymbolKind.NAMESPACE: "N",
    SymbolKind.PACKAGE: "P",
    SymbolKind.CLASS: "C",
    SymbolKind.METHOD: "m",
    SymbolKind.PROPERTY: "p",
    SymbolKind.FIELD: "d",
    SymbolKind.CONSTRUCTOR: "k",
    SymbolKind.ENUM: "E",
    SymbolKind.INTERFACE: "I",
    SymbolKind.FUNCTION: "f",
    SymbolKind.VARIABLE: "v",
    SymbolKind.CONSTANT: "K",
    SymbolKind.ENUM_MEMBER: "e",
    SymbolKind.STRUCT: "S",
    SymbolKind.OBJECT: "O",
    SymbolKind.TYPE_PARAMETER: "T",
}


def icon_for_kind(kind: SymbolKind) -> str:
    return _KIND_ICONS.get(kind, "?")


def label_for(node: OutlineNode, settings: Settings) -> str:
    """Row label: padded line number (with result marker), indentation, icon and name."""

    indent = " " * (node.depth * settings.indent_width)
    if node.ty == "symbol":
        marker = settings.result_marker if node.is_search_result else ""
        number = f"{node.start_line}{marker}".ljust(settings.line_number_width)
        return f"{number} {indent} {icon_for_kind(node.kind)} {node.name}"

    number = f"{node.line_number}{settings.result_marker}".ljust(settings.line_number_width)
    return f"{number} {indent} {node.line.text.strip()}"


def description_for(node: OutlineNode, document: DocumentAccessor) -> str:
    """Secondary text: the symbol detail, else the first source line of the symbol."""

    if node.ty == "line":
        return ""
    if node.detail:
        return node.detail
    return document.line_at(node.start_line).text.strip()
