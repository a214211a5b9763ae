"""Data models for the lsp-gxl pipeline."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path


class SymbolKind(enum.IntEnum):
    """Symbol kinds as numbered by the language server protocol."""
    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26


class NodeType(enum.Enum):
    FILE = "File"
    CLASS = "Class"
    MEMBER = "Member"
    METHOD = "Method"
    ROUTINE = "Routine"


class EdgeType(enum.Enum):
    ENCLOSING = "Enclosing"
    SOURCE_DEPENDENCY = "Source_Dependency"


# Closed table; kinds missing here never become nodes or edge endpoints.
NODE_TYPES: dict[SymbolKind, NodeType] = {
    SymbolKind.FILE: NodeType.FILE,
    SymbolKind.MODULE: NodeType.FILE,
    SymbolKind.CLASS: NodeType.CLASS,
    SymbolKind.FIELD: NodeType.MEMBER,
    SymbolKind.PROPERTY: NodeType.MEMBER,
    SymbolKind.METHOD: NodeType.METHOD,
    SymbolKind.FUNCTION: NodeType.ROUTINE,
}


def node_type_for(kind: SymbolKind) -> NodeType | None:
    return NODE_TYPES.get(kind)


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line/column pair."""
    line: int
    character: int

    def shifted(self, columns: int) -> Position:
        return Position(self.line, self.character + columns)


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    @classmethod
    def empty(cls) -> Range:
        origin = Position(0, 0)
        return cls(origin, origin)

    def contains(self, other: Range) -> bool:
        """True if ``other`` lies inside this range, bounds inclusive."""
        return self.start <= other.start and other.end <= self.end

    def strictly_contains(self, other: Range) -> bool:
        return self.contains(other) and self != other


@dataclass(frozen=True)
class Symbol:
    """A declared program element reported by the provider or synthesized by the builder."""
    kind: SymbolKind
    name: str
    file_id: Path
    range: Range
    container_name: str | None = None
    selection_range: Range | None = None

    @property
    def node_type(self) -> NodeType | None:
        return node_type_for(self.kind)

    @property
    def is_file(self) -> bool:
        return self.kind == SymbolKind.FILE

    @property
    def anchor(self) -> Position:
        """Where a reference query for this symbol starts, before keyword adjustment."""
        if self.selection_range is not None:
            return self.selection_range.start
        return self.range.start


@dataclass(frozen=True)
class Location:
    """A raw reference location returned by the provider."""
    file_id: Path
    range: Range


@dataclass
class GraphConfig:
    """Configuration for the graph pipeline."""
    root_path: Path = field(default_factory=lambda: Path("."))
    file_pattern: str | None = None
    ignore: list[str] = field(default_factory=list)
    out_file: Path = field(default_factory=lambda: Path("graph.gxl"))
    server_command: list[str] = field(default_factory=list)
    include_references: bool = True
    open_documents: bool = True
    log_level: str = ""
    import_pattern: str | None = None
    declaration_keywords: tuple[str, ...] | None = None

    def __post_init__(self):
        self.root_path = Path(self.root_path).resolve()
        self.out_file = Path(self.out_file)
        if not self.file_pattern:
            self.file_pattern = os.getenv("LSP_GXL_FILE_PATTERN") or None
        if not self.log_level:
            self.log_level = os.getenv("LSP_GXL_LOG_LEVEL", "INFO")
        self.log_level = self.log_level.upper()


@dataclass
class ExportResult:
    """Result of a pipeline run."""
    out_file: Path
    node_count: int = 0
    edge_count: int = 0
    dangling: list[tuple[str, str]] = field(default_factory=list)
