"""Structural symbol models.

A symbol source hands the engine a forest of :class:`SymbolInfo` records. The forest is
not required to be ordered; the outline tree sorts it by start position.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from quickoutline.models.document import Range


class SymbolKind(str, Enum):
    """Structural category of a symbol."""

    FILE = "file"
    MODULE = "module"
    NAMESPACE = "namespace"
    PACKAGE = "package"
    CLASS = "class"
    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"
    CONSTRUCTOR = "constructor"
    ENUM = "enum"
    INTERFACE = "interface"
    FUNCTION = "function"
    VARIABLE = "variable"
    CONSTANT = "constant"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    KEY = "key"
    NULL = "null"
    ENUM_MEMBER = "enum-member"
    STRUCT = "struct"
    EVENT = "event"
    OPERATOR = "operator"
    TYPE_PARAMETER = "type-parameter"


class SymbolInfo(BaseModel):
    """A document symbol with optional nested children."""

    name: str
    kind: SymbolKind
    range: Range
    detail: str | None = None
    children: list["SymbolInfo"] = Field(default_factory=list)
